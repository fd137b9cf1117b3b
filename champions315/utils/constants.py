"""
Constants for the Champions 315 live lineup manager.

This module contains the league rules and match configuration used
throughout the application.
"""

# Application metadata
APP_TITLE = "Champions 315"

# League age rule: sum of on-field ages, or average once anyone is sent off
AGE_LIMIT = 315
AVG_AGE_LIMIT = 35

# Fixed league formation (GK + 4 + 3 + 1)
FORMATION = "4-3-1"
PLAYERS_ON_FIELD = 9
GROUP_SIZES = {
    "gk": 1,
    "defenders": 4,
    "midfielders": 3,
    "attackers": 1,
}

# Match clock
PERIOD_DURATION_SECONDS = 20 * 60
TOTAL_PERIODS = 3
TICK_INTERVAL_SECONDS = 1.0

# Undo history kept per live session
MAX_SESSION_HISTORY = 50
