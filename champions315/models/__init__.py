"""
Models package for the Champions 315 live lineup manager.

This package contains the core data models used throughout the application.
"""
from .player import Player, Position
from .lineup import (
    SlotGroup, SlotRef, LineupPlayers, Team, SavedLineup, LineupData
)
from .lineup_state import (
    GkReplacementPhase, YellowCard, PendingSubstitution, LineupState, LineupMetrics
)
from .game_clock import GameClock
from .match_result import GameResult, ExpelledPlayer

__all__ = [
    "Player", "Position", "SlotGroup", "SlotRef", "LineupPlayers", "Team",
    "SavedLineup", "LineupData", "GkReplacementPhase",
    "YellowCard", "PendingSubstitution", "LineupState", "LineupMetrics",
    "GameClock", "GameResult", "ExpelledPlayer"
]
