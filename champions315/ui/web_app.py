"""
Web application module for Champions 315.

This module contains the Flask web server that serves the match screen
and provides JSON API endpoints for the live lineup, the match clock and
the match history.
"""
import logging
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from .. import settings
from ..errors import Champions315Error, LineupNotFoundError, MatchValidationError
from ..services import LiveMatch, MatchHistoryStore, RosterService
from ..utils import APP_TITLE

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Owns the roster source, the match recorder and the live match for the
    currently selected lineup. Switching lineups discards the live match.
    """

    def __init__(self, roster_service: RosterService, recorder):
        self.roster_service = roster_service
        self.recorder = recorder
        self.match: Optional[LiveMatch] = None
        default_id = roster_service.default_lineup_id()
        if default_id is not None:
            self.start_match(default_id)

    def start_match(self, lineup_id: str) -> LiveMatch:
        """Discard the current match and start a new one from a saved lineup."""
        lineup = self.roster_service.build_lineup_data(lineup_id)
        if self.match is not None:
            self.match.timer.stop()
        self.match = LiveMatch(lineup_id, lineup, self.recorder)
        logger.info("Started match session from lineup %s", lineup_id)
        return self.match

    def require_match(self) -> LiveMatch:
        if self.match is None:
            raise MatchValidationError("No lineup selected")
        return self.match


def _read_json() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _error(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({"success": False, "error": message}), status


def create_app(
    roster_service: Optional[RosterService] = None,
    recorder=None,
    static_folder: str = ".",
) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        roster_service: Lineup source (defaults to the configured roster file)
        recorder: Match-recording sink (defaults to the configured history file)
        static_folder: Directory to serve static files from

    Returns:
        Configured Flask application instance
    """
    if roster_service is None:
        roster_service = RosterService.load_roster_file(settings.ROSTER_FILE)
    if recorder is None:
        recorder = MatchHistoryStore(settings.HISTORY_FILE)

    app = Flask(__name__, static_folder=static_folder, static_url_path="")
    app_state = WebAppState(roster_service, recorder)
    app.config["APP_STATE"] = app_state

    @app.errorhandler(LineupNotFoundError)
    def handle_lineup_not_found(e):
        return _error(str(e), 404)

    @app.errorhandler(Champions315Error)
    def handle_domain_error(e):
        return _error(str(e), 400)

    @app.errorhandler(ValueError)
    def handle_bad_request(e):
        return _error(str(e), 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _error(str(e), 500)

    @app.route("/")
    def index():
        """Serve the match screen, or a short status if no frontend is bundled."""
        index_path = os.path.join(static_folder, "index.html")
        if os.path.exists(index_path):
            response = send_from_directory(static_folder, "index.html")
            response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
            return response
        return jsonify({"success": True, "app": APP_TITLE})

    # ==================== Helpers ==================== #

    def _state_response(applied: bool = True):
        match = app_state.require_match()
        return jsonify({"success": True, "applied": applied, "state": match.snapshot()})

    def _int_field(data: Dict[str, Any], key: str, default: Optional[int] = None) -> int:
        value = data.get(key, default)
        if value is None:
            raise ValueError(f"'{key}' is required")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"'{key}' must be an integer") from None

    # ==================== Lineups ==================== #

    @app.route("/api/lineups", methods=["GET"])
    def get_lineups():
        """List saved lineups and the one currently in play."""
        match = app_state.match
        return jsonify({
            "success": True,
            "team": app_state.roster_service.team.name,
            "lineups": app_state.roster_service.lineup_options(),
            "activeLineupId": match.lineup_id if match else None,
        })

    @app.route("/api/game/lineup", methods=["POST"])
    def switch_lineup():
        """Switch to another saved lineup, discarding the live session."""
        lineup_id = _read_json().get("lineupId")
        if not lineup_id:
            return _error("'lineupId' is required", 400)
        app_state.start_match(str(lineup_id))
        return jsonify({
            "success": True,
            "applied": True,
            "state": app_state.match.snapshot(),
            "warnings": app_state.roster_service.lineup_warnings(str(lineup_id)),
        })

    # ==================== Live lineup ==================== #

    @app.route("/api/game/state", methods=["GET"])
    def get_game_state():
        return _state_response()

    @app.route("/api/game/field-click", methods=["POST"])
    def field_click():
        """Route a field slot click (select, or goalkeeper replacement step)."""
        data = _read_json()
        group = data.get("group")
        if not group:
            return _error("'group' is required", 400)
        index = _int_field(data, "index", default=0)
        applied = app_state.require_match().field_click(group, index)
        return _state_response(applied)

    @app.route("/api/game/bench-click", methods=["POST"])
    def bench_click():
        """Route a bench click (substitute, or new goalkeeper from the bench)."""
        index = _int_field(_read_json(), "index")
        applied = app_state.require_match().bench_click(index)
        return _state_response(applied)

    def _action_endpoint(action: str):
        def endpoint():
            applied = app_state.require_match().perform(action)
            return _state_response(applied)
        return endpoint

    for rule, action in (
        ("/api/game/cancel", "cancel"),
        ("/api/game/red-card", "red-card"),
        ("/api/game/yellow-card", "yellow-card"),
        ("/api/game/substitution/confirm", "confirm-substitution"),
        ("/api/game/substitution/cancel", "cancel-substitution"),
        ("/api/game/undo", "undo"),
        ("/api/game/redo", "redo"),
    ):
        app.add_url_rule(
            rule, endpoint=f"game_{action}", view_func=_action_endpoint(action), methods=["POST"]
        )

    # ==================== Match clock ==================== #

    def _clock_endpoint(action: str):
        def endpoint():
            applied = app_state.require_match().control_clock(action)
            return _state_response(applied)
        return endpoint

    for rule, action in (
        ("/api/timer/start", "start"),
        ("/api/timer/stop", "stop"),
        ("/api/timer/next-period", "next-period"),
        ("/api/timer/reset", "reset"),
    ):
        app.add_url_rule(
            rule, endpoint=f"timer_{action}", view_func=_clock_endpoint(action), methods=["POST"]
        )

    @app.route("/api/timer/period", methods=["POST"])
    def set_period():
        period = _int_field(_read_json(), "period")
        applied = app_state.require_match().control_clock("period", period)
        return _state_response(applied)

    # ==================== Finish & history ==================== #

    @app.route("/api/game/finish", methods=["POST"])
    def finish_game():
        """Stop the clock and freeze the lineup for the result form."""
        app_state.require_match().finish()
        return _state_response()

    @app.route("/api/game/resume", methods=["POST"])
    def resume_game():
        app_state.require_match().resume()
        return _state_response()

    @app.route("/api/game/save", methods=["POST"])
    def save_game():
        """Record the finished match with the opponent and final score."""
        data = _read_json()
        result = app_state.require_match().save_result(
            opponent_name=data.get("opponentName", ""),
            score_home=data.get("scoreHome", 0),
            score_away=data.get("scoreAway", 0),
            game_date=data.get("gameDate"),
        )
        return jsonify({
            "success": True,
            "result": result.to_dict(),
            "summary": result.summary_line(app_state.match.lineup.team_name),
        })

    @app.route("/api/matches", methods=["GET"])
    def get_matches():
        """List saved matches, newest first."""
        list_matches = getattr(app_state.recorder, "list_matches", None)
        matches = list_matches() if list_matches else []
        return jsonify({"success": True, "matches": [m.to_dict() for m in matches]})

    return app


def run_web_app(
    host: str = settings.HOST,
    port: int = settings.PORT,
    static_folder: str = ".",
) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        static_folder: Directory containing static files (HTML, CSS, JS)
    """
    app = create_app(static_folder=static_folder)
    app.run(host=host, port=port, debug=False)

