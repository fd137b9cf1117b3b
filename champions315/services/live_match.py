"""
Live match controller for the Champions 315 live lineup manager.

This module ties a lineup session and the match clock together for the
match screen: it routes field and bench clicks to the right session
operation for the current phase, freezes the session when the game is
finished, and hands the result to the match-recording sink.
"""
import logging
from typing import Any, Dict, Optional

from ..errors import MatchValidationError
from ..models import (
    ExpelledPlayer, GameResult, GkReplacementPhase, LineupData
)
from ..utils import AGE_LIMIT, AVG_AGE_LIMIT, today_iso
from .lineup_session import LineupSession
from .match_history import MatchRecorder
from .timer_service import TimerService

logger = logging.getLogger(__name__)


class LiveMatch:
    """
    One match in progress, seeded from a saved lineup.

    Attributes:
        lineup_id: Saved lineup the match started from
        lineup: Seed data (team name, colors, starting arrangement)
        session: Lineup state machine
        timer: Match clock
        finished: Whether the coach pressed "finish"; the session is frozen
    """

    def __init__(
        self,
        lineup_id: str,
        lineup: LineupData,
        recorder: MatchRecorder,
        *,
        session: Optional[LineupSession] = None,
        timer: Optional[TimerService] = None,
    ):
        self.lineup_id = lineup_id
        self.lineup = lineup
        self.recorder = recorder
        self.session = session or LineupSession(lineup.players, lineup.bench)
        self.timer = timer or TimerService()
        self.finished = False
        self.saved_result: Optional[GameResult] = None

    # ------------------------------------------------------------------
    # Click routing
    # ------------------------------------------------------------------
    def field_click(self, group, index: int = 0) -> bool:
        """
        Handle a click on a field slot.

        While the goalkeeper is being replaced the click picks the new
        keeper or the outfielder to bench; otherwise it selects the slot.
        """
        if self.finished:
            return False
        phase = self.session.gk_phase
        if phase is GkReplacementPhase.CHOOSE_REPLACEMENT:
            return self.session.replace_gk_from_field(group, index)
        if phase is GkReplacementPhase.CHOOSE_OUTFIELDER_TO_REMOVE:
            return self.session.remove_outfielder_for_gk_replacement(group, index)
        return self.session.select_slot(group, index)

    def bench_click(self, bench_index: int) -> bool:
        """Handle a click on a bench player."""
        if self.finished:
            return False
        phase = self.session.gk_phase
        if phase is GkReplacementPhase.CHOOSE_REPLACEMENT:
            return self.session.replace_gk_from_bench(bench_index)
        if phase is GkReplacementPhase.CHOOSE_OUTFIELDER_TO_REMOVE:
            return False
        return self.session.substitute(bench_index)

    def perform(self, action: str) -> bool:
        """
        Run a selection follow-up action by name.

        Args:
            action: One of ``cancel``, ``red-card``, ``yellow-card``,
                ``confirm-substitution``, ``cancel-substitution``,
                ``undo`` or ``redo``

        Raises:
            ValueError: If the action name is unknown
        """
        actions = {
            "cancel": self.session.cancel_selection,
            "red-card": self.session.expel_selected,
            "yellow-card": self.session.give_yellow_card,
            "confirm-substitution": self.session.confirm_pending_substitution,
            "cancel-substitution": self.session.cancel_pending_substitution,
            "undo": self.session.undo,
            "redo": self.session.redo,
        }
        if action not in actions:
            raise ValueError(f"Unknown action: {action}")
        if self.finished:
            return False
        return actions[action]()

    def control_clock(self, action: str, period: Optional[int] = None) -> bool:
        """
        Run a match clock control by name. Ignored once the match is finished.

        Args:
            action: One of ``start``, ``stop``, ``next-period``, ``period``
                or ``reset``
            period: Target period for the ``period`` action

        Raises:
            ValueError: If the action name is unknown, or ``period`` has no target
        """
        controls = {
            "start": self.timer.start,
            "stop": self.timer.stop,
            "next-period": self.timer.next_period,
            "period": lambda: self.timer.set_period(period),
            "reset": self.timer.reset,
        }
        if action not in controls:
            raise ValueError(f"Unknown clock control: {action}")
        if self.finished:
            return False
        if action == "period" and period is None:
            raise ValueError("A period is required")
        controls[action]()
        return True

    # ------------------------------------------------------------------
    # Finish and hand-off
    # ------------------------------------------------------------------
    def finish(self) -> None:
        """Stop the clock and freeze the lineup."""
        self.timer.stop()
        self.finished = True
        logger.info("Match finished at period %d %s", self.timer.clock.period, self.timer.formatted())

    def resume(self) -> None:
        """Go back to the match screen from the finish form."""
        self.finished = False

    def save_result(
        self,
        opponent_name: str,
        score_home: int,
        score_away: int,
        game_date: Optional[str] = None,
    ) -> GameResult:
        """
        Build the match result and hand it to the recorder.

        Args:
            opponent_name: Opponent team name (required)
            score_home: Goals scored by our team (negative values become 0)
            score_away: Goals scored by the opponent (negative values become 0)
            game_date: ``YYYY-MM-DD`` (defaults to today)

        Returns:
            The recorded GameResult

        Raises:
            MatchValidationError: If the match is not finished or input is invalid
        """
        if not self.finished:
            raise MatchValidationError("Finish the match before saving it")

        name = (opponent_name or "").strip()
        if not name:
            raise MatchValidationError("Opponent name is required")
        try:
            home = max(0, int(score_home))
            away = max(0, int(score_away))
        except (TypeError, ValueError) as e:
            raise MatchValidationError(f"Scores must be whole numbers: {e}") from e

        state = self.session.state
        result = GameResult(
            opponent_name=name,
            game_date=game_date or today_iso(),
            score_home=home,
            score_away=away,
            yellow_cards=list(state.yellow_cards),
            expelled_players=[ExpelledPlayer.for_player(p) for p in state.ejected],
        )
        self.recorder.record(result)
        self.saved_result = result
        logger.info("Saved result: %s", result.summary_line(self.lineup.team_name))
        return result

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, Any]:
        """Return everything the match screen renders, JSON-ready."""
        state = self.session.state
        metrics = self.session.metrics
        selected = self.session.selected_player
        phase = state.gk_phase

        data = state.to_dict()
        data.update({
            "lineupId": self.lineup_id,
            "teamName": self.lineup.team_name,
            "teamColor": self.lineup.team_color,
            "sponsorLogo": self.lineup.sponsor_logo,
            "formation": self.lineup.formation,
            "metrics": metrics.to_dict(),
            "ageLimit": AGE_LIMIT,
            "avgAgeLimit": AVG_AGE_LIMIT,
            "selectedPlayer": selected.to_dict() if selected else None,
            "selectedPlayerHasYellow": bool(selected and selected.id in self.session.yellow_card_ids),
            "highlightBench": phase is GkReplacementPhase.CHOOSE_REPLACEMENT,
            "highlightField": phase is not None,
            "timer": self.timer.to_dict(),
            "finished": self.finished,
            "canUndo": self.session.history.can_undo(),
            "canRedo": self.session.history.can_redo(),
        })
        return data
