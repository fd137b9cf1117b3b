"""
Player model for the Champions 315 live lineup manager.

This module contains the Player dataclass which represents a registered
squad member. Players are immutable for the lifetime of a live session;
the roster service owns them.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.age import calc_age, parse_birth_date


class Position(Enum):
    """Registered position of a player."""
    GK = "GK"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"


@dataclass(frozen=True)
class Player:
    """
    Represents a soccer player registered with the team.

    Attributes:
        id: Unique identifier assigned by the backend
        number: Jersey number
        name: Display name
        birth_date: Date of birth (only the year counts for the age rule)
        position: Registered position (GK, DEF, MID or FWD)
        avatar: Optional URL of the player's photo
        field_role: Optional lateral sub-position (e.g. "LCB", "RW"), display only
    """
    id: str
    number: int
    name: str
    birth_date: date
    position: Position = Position.MID
    avatar: Optional[str] = None
    field_role: Optional[str] = None

    def age(self, reference_year: int) -> int:
        """
        Calculate the player's league age.

        Args:
            reference_year: Year the age is computed against

        Returns:
            Age in years, year-granularity
        """
        return calc_age(self.birth_date, reference_year)

    @property
    def is_goalkeeper(self) -> bool:
        return self.position is Position.GK

    def label(self) -> str:
        """Return the ``Name (#10)`` label used in summaries."""
        return f"{self.name} (#{self.number})"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary using the backend's camelCase keys
        """
        return {
            "id": self.id,
            "number": self.number,
            "name": self.name,
            "birthDate": self.birth_date.isoformat(),
            "position": self.position.value,
            "avatar": self.avatar,
            "fieldRole": self.field_role,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Accepts both the backend's camelCase keys and snake_case keys.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance

        Raises:
            KeyError: If id, number, name or birth date is missing
            ValueError: If the birth date or position is invalid
        """
        birth_raw = data["birthDate"] if "birthDate" in data else data["birth_date"]
        field_role = data.get("fieldRole", data.get("field_role"))
        return cls(
            id=str(data["id"]),
            number=int(data["number"]),
            name=str(data["name"]).strip(),
            birth_date=parse_birth_date(birth_raw),
            position=Position(str(data.get("position") or "MID").upper()),
            avatar=data.get("avatar") or None,
            field_role=field_role or None,
        )
