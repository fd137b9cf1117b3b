"""
LineupState model for the Champions 315 live lineup manager.

This module contains the immutable state of one live lineup session and
the records it accumulates (yellow cards, pending substitutions). Every
lineup operation takes a LineupState and returns a new one.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .lineup import LineupPlayers, SlotRef
from .player import Player


class GkReplacementPhase(Enum):
    """Steps of the mandatory flow after the goalkeeper is sent off."""
    CHOOSE_REPLACEMENT = "choose-replacement"
    CHOOSE_OUTFIELDER_TO_REMOVE = "choose-outfielder-to-remove"


@dataclass(frozen=True)
class YellowCard:
    """A caution shown to a player (at most one per player per match)."""
    player_id: str
    player_number: int
    player_name: str

    @classmethod
    def for_player(cls, player: Player) -> 'YellowCard':
        return cls(player_id=player.id, player_number=player.number, player_name=player.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "playerId": self.player_id,
            "playerNumber": self.player_number,
            "playerName": self.player_name,
        }


@dataclass(frozen=True)
class PendingSubstitution:
    """A substitution held back because it would break the age-sum rule."""
    bench_index: int
    projected_total_age: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "benchIndex": self.bench_index,
            "projectedTotalAge": self.projected_total_age,
        }


@dataclass(frozen=True)
class LineupState:
    """
    Complete state of a live lineup session.

    Attributes:
        players: Current on-field arrangement
        bench: Substitutes, in insertion order (players subbed off go to the tail)
        selection: Field slot awaiting a follow-up action, if any
        yellow_cards: Cautions shown so far, one per player
        ejected: Players sent off; they never return
        gk_phase: Active goalkeeper-replacement step, if any
        pending_sub: Substitution awaiting confirmation, if any
    """
    players: LineupPlayers
    bench: Tuple[Player, ...] = ()
    selection: Optional[SlotRef] = None
    yellow_cards: Tuple[YellowCard, ...] = ()
    ejected: Tuple[Player, ...] = ()
    gk_phase: Optional[GkReplacementPhase] = None
    pending_sub: Optional[PendingSubstitution] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the state to a JSON-serializable dictionary.

        Returns:
            Dictionary representation (derived metrics not included)
        """
        return {
            "players": self.players.to_dict(),
            "bench": [p.to_dict() for p in self.bench],
            "selection": self.selection.to_dict() if self.selection else None,
            "yellowCards": [c.to_dict() for c in self.yellow_cards],
            "ejected": [p.to_dict() for p in self.ejected],
            "gkPhase": self.gk_phase.value if self.gk_phase else None,
            "pendingSub": self.pending_sub.to_dict() if self.pending_sub else None,
        }


@dataclass(frozen=True)
class LineupMetrics:
    """Values derived from a LineupState; never stored on the state itself."""
    on_field_players: List[Player]
    total_age: int
    average_age: float
    has_expulsions: bool
    is_below_threshold: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "onFieldCount": len(self.on_field_players),
            "totalAge": self.total_age,
            "averageAge": self.average_age,
            "hasExpulsions": self.has_expulsions,
            "isBelowThreshold": self.is_below_threshold,
        }
