"""
Services package for the Champions 315 live lineup manager.

This package contains service classes that handle business logic: the
lineup state machine, the match clock, the roster source and the
match-recording sink.
"""
from .persistence_service import PersistenceService
from .timer_service import TimerService, ClockTicker
from .session_history import SessionHistory
from .lineup_session import LineupSession
from .roster_service import RosterService, distribute_by_formation
from .match_history import MatchRecorder, MatchHistoryStore, InMemoryMatchRecorder
from .live_match import LiveMatch

__all__ = [
    "PersistenceService", "TimerService", "ClockTicker", "SessionHistory",
    "LineupSession", "RosterService", "distribute_by_formation",
    "MatchRecorder", "MatchHistoryStore", "InMemoryMatchRecorder", "LiveMatch"
]
