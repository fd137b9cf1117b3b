"""
Champions 315

Live lineup manager for an amateur soccer league where the ages of the
players on the field must add up to at least 315 (or average 35 once
someone has been sent off).

This package provides the lineup state machine, the match clock, and a
Flask web API for the match screen.
"""
from .models import Player, LineupPlayers, LineupState
from .services import LineupSession, LiveMatch, RosterService, TimerService
from .utils import calc_age, fmt_mmss, APP_TITLE, AGE_LIMIT, AVG_AGE_LIMIT

__version__ = "1.0.0"

__all__ = [
    "Player", "LineupPlayers", "LineupState", "LineupSession", "LiveMatch",
    "RosterService", "TimerService", "calc_age", "fmt_mmss", "APP_TITLE",
    "AGE_LIMIT", "AVG_AGE_LIMIT"
]
