"""Lineup session service for the Champions 315 live lineup manager."""

import logging
from typing import Callable, Iterable, List, Optional, Set

from . import lineup_reducer as reducer
from .session_history import SessionHistory
from ..models import (
    GkReplacementPhase, LineupMetrics, LineupPlayers, LineupState, Player
)
from ..utils import current_year

logger = logging.getLogger(__name__)


def _as_index(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class LineupSession:
    """
    Owns the lineup state of one live match.

    Each action method applies the matching reducer and returns True when
    the state changed, False when the request was ignored. Metrics are
    recomputed from the current state on every read.

    Cards are final: applying a red or yellow card clears the undo history,
    so neither can be taken back.
    """

    def __init__(
        self,
        players: LineupPlayers,
        bench: Iterable[Player],
        *,
        reference_year: Optional[int] = None,
        year_provider: Callable[[], int] = current_year,
        history: Optional[SessionHistory] = None,
    ):
        """
        Initialize the session from a starting lineup.

        Args:
            players: Starting on-field arrangement
            bench: Substitutes available at kick-off
            reference_year: Fixed year for age calculations (overrides year_provider)
            year_provider: Callable returning the year ages are computed against
            history: Optional undo/redo history
        """
        self._state = reducer.initial_state(players, bench)
        self._reference_year = reference_year
        self._year_provider = year_provider
        self.history = history or SessionHistory()

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def state(self) -> LineupState:
        return self._state

    @property
    def reference_year(self) -> int:
        if self._reference_year is not None:
            return self._reference_year
        return self._year_provider()

    @property
    def metrics(self) -> LineupMetrics:
        return reducer.compute_metrics(self._state, self.reference_year)

    @property
    def gk_phase(self) -> Optional[GkReplacementPhase]:
        return self._state.gk_phase

    @property
    def selected_player(self) -> Optional[Player]:
        return reducer.selected_player(self._state)

    @property
    def yellow_card_ids(self) -> Set[str]:
        return reducer.yellow_card_ids(self._state)

    @property
    def ejected(self) -> List[Player]:
        return list(self._state.ejected)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def select_slot(self, group, index: int = 0) -> bool:
        return self._apply(f"Select {group}[{index}]", reducer.select_slot, group, index)

    def cancel_selection(self) -> bool:
        return self._apply("Cancel selection", reducer.cancel_selection)

    def substitute(self, bench_index: int) -> bool:
        return self._apply(
            f"Substitute from bench #{bench_index}",
            reducer.substitute, _as_index(bench_index), self.reference_year,
        )

    def confirm_pending_substitution(self) -> bool:
        return self._apply("Confirm substitution", reducer.confirm_pending_substitution)

    def cancel_pending_substitution(self) -> bool:
        return self._apply("Cancel substitution", reducer.cancel_pending_substitution)

    def expel_selected(self) -> bool:
        player = self.selected_player
        label = player.label() if player else "empty slot"
        return self._apply(f"Red card {label}", reducer.expel_selected)

    def give_yellow_card(self) -> bool:
        player = self.selected_player
        label = player.label() if player else "empty slot"
        return self._apply(f"Yellow card {label}", reducer.give_yellow_card)

    def replace_gk_from_bench(self, bench_index: int) -> bool:
        return self._apply(
            f"Goalkeeper from bench #{bench_index}",
            reducer.replace_gk_from_bench, _as_index(bench_index),
        )

    def replace_gk_from_field(self, group, index: int) -> bool:
        return self._apply(
            f"Goalkeeper from {group}[{index}]",
            reducer.replace_gk_from_field, group, index,
        )

    def remove_outfielder_for_gk_replacement(self, group, index: int) -> bool:
        return self._apply(
            f"Bench {group}[{index}] for new goalkeeper",
            reducer.remove_outfielder_for_gk_replacement, group, index,
        )

    def undo(self) -> bool:
        entry = self.history.undo()
        if entry is None:
            return False
        self._state = entry.before
        logger.info("Undid: %s", entry.description)
        return True

    def redo(self) -> bool:
        entry = self.history.redo()
        if entry is None:
            return False
        self._state = entry.after
        logger.info("Redid: %s", entry.description)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _apply(self, description: str, operation, *args) -> bool:
        before = self._state
        after = operation(before, *args)
        if after is before:
            logger.debug("Ignored: %s", description)
            return False
        self._state = after
        if after.ejected != before.ejected or after.yellow_cards != before.yellow_cards:
            self.history.clear()
        else:
            self.history.record(description, before, after)
        logger.info("Applied: %s", description)
        return True
