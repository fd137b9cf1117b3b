"""
Lineup models for the Champions 315 live lineup manager.

This module contains the on-field arrangement (goalkeeper plus the 4-3-1
outfield groups), the uniform slot addressing used by every lineup
operation, and the saved lineup/team records supplied by the roster.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .player import Player
from ..utils.constants import FORMATION


class SlotGroup(Enum):
    """Field groups a slot can belong to."""
    GK = "gk"
    DEFENDERS = "defenders"
    MIDFIELDERS = "midfielders"
    ATTACKERS = "attackers"

    @property
    def is_outfield(self) -> bool:
        return self is not SlotGroup.GK


@dataclass(frozen=True)
class SlotRef:
    """
    Address of a single field slot.

    The goalkeeper slot is always index 0; the ``-1`` sentinel some clients
    send for the goalkeeper is normalised by :meth:`of`.
    """
    group: SlotGroup
    index: int = 0

    @classmethod
    def of(cls, group, index: int = 0) -> 'SlotRef':
        """Build a slot reference from a group name or SlotGroup."""
        slot_group = group if isinstance(group, SlotGroup) else SlotGroup(str(group))
        if slot_group is SlotGroup.GK:
            return cls(SlotGroup.GK, 0)
        return cls(slot_group, int(index))

    def to_dict(self) -> Dict[str, Any]:
        return {"group": self.group.value, "index": self.index}


@dataclass(frozen=True)
class LineupPlayers:
    """
    Players currently on the field.

    Attributes:
        gk: Goalkeeper, or None when the goal is vacant
        defenders: Defender slots (4 at kick-off)
        midfielders: Midfielder slots (3 at kick-off)
        attackers: Attacker slots (1 at kick-off)
    """
    gk: Optional[Player] = None
    defenders: Tuple[Optional[Player], ...] = ()
    midfielders: Tuple[Optional[Player], ...] = ()
    attackers: Tuple[Optional[Player], ...] = ()

    def group(self, group: SlotGroup) -> Tuple[Optional[Player], ...]:
        """Return the slots of a group as a tuple."""
        if group is SlotGroup.GK:
            return (self.gk,)
        return getattr(self, group.value)

    def contains(self, ref: SlotRef) -> bool:
        """Return True if ``ref`` addresses an existing slot."""
        return 0 <= ref.index < len(self.group(ref.group))

    def get(self, ref: SlotRef) -> Optional[Player]:
        """Return the player in a slot, or None if empty or out of range."""
        if not self.contains(ref):
            return None
        return self.group(ref.group)[ref.index]

    def replace(self, ref: SlotRef, player: Optional[Player]) -> 'LineupPlayers':
        """Return a copy with ``player`` placed in the slot."""
        if ref.group is SlotGroup.GK:
            return replace(self, gk=player)
        slots = list(self.group(ref.group))
        slots[ref.index] = player
        return replace(self, **{ref.group.value: tuple(slots)})

    def vacate(self, ref: SlotRef) -> 'LineupPlayers':
        """Return a copy with the slot left empty."""
        return self.replace(ref, None)

    def remove(self, ref: SlotRef) -> 'LineupPlayers':
        """
        Return a copy with the slot removed.

        The goalkeeper slot becomes empty; outfield slots are spliced out,
        shrinking their group.
        """
        if ref.group is SlotGroup.GK:
            return replace(self, gk=None)
        slots = list(self.group(ref.group))
        del slots[ref.index]
        return replace(self, **{ref.group.value: tuple(slots)})

    def on_field(self) -> List[Player]:
        """Flatten goalkeeper and outfield groups, skipping empty slots."""
        everyone = [self.gk, *self.defenders, *self.midfielders, *self.attackers]
        return [p for p in everyone if p is not None]

    def to_dict(self) -> Dict[str, Any]:
        def _slots(players):
            return [p.to_dict() if p else None for p in players]

        return {
            "gk": self.gk.to_dict() if self.gk else None,
            "defenders": _slots(self.defenders),
            "midfielders": _slots(self.midfielders),
            "attackers": _slots(self.attackers),
        }


@dataclass
class Team:
    """The coach's team as returned by the backend."""
    id: str
    name: str
    color: str = "#22c55e"
    sponsor_logo: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            color=data.get("color") or "#22c55e",
            sponsor_logo=data.get("sponsorLogo", data.get("sponsor_logo")),
        )


@dataclass
class SavedLineup:
    """A lineup saved by the coach: 9 starter ids plus the bench ids."""
    id: str
    team_id: str
    name: str
    formation: str = FORMATION
    starter_ids: List[str] = field(default_factory=list)
    bench_ids: List[str] = field(default_factory=list)
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SavedLineup':
        return cls(
            id=str(data["id"]),
            team_id=str(data.get("teamId", data.get("team_id", ""))),
            name=str(data["name"]),
            formation=data.get("formation") or FORMATION,
            starter_ids=[str(i) for i in data.get("starterIds", data.get("starter_ids", []))],
            bench_ids=[str(i) for i in data.get("benchIds", data.get("bench_ids", []))],
            created_at=data.get("createdAt", data.get("created_at")),
        )


@dataclass(frozen=True)
class LineupData:
    """Everything needed to seed a live session for one saved lineup."""
    formation: str
    team_name: str
    players: LineupPlayers
    bench: Tuple[Player, ...] = ()
    team_color: Optional[str] = None
    sponsor_logo: Optional[str] = None
