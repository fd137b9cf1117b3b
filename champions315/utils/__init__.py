"""
Utilities package for the Champions 315 live lineup manager.

This package contains utility functions and league constants used
throughout the application.
"""
from .time_utils import fmt_mmss, now_ts, current_year, today_iso
from .age import calc_age, parse_birth_date
from .constants import (
    APP_TITLE, AGE_LIMIT, AVG_AGE_LIMIT, FORMATION, PLAYERS_ON_FIELD,
    GROUP_SIZES, PERIOD_DURATION_SECONDS, TOTAL_PERIODS, TICK_INTERVAL_SECONDS,
    MAX_SESSION_HISTORY
)

__all__ = [
    "fmt_mmss", "now_ts", "current_year", "today_iso", "calc_age",
    "parse_birth_date", "APP_TITLE", "AGE_LIMIT", "AVG_AGE_LIMIT", "FORMATION",
    "PLAYERS_ON_FIELD", "GROUP_SIZES", "PERIOD_DURATION_SECONDS", "TOTAL_PERIODS",
    "TICK_INTERVAL_SECONDS", "MAX_SESSION_HISTORY"
]
