"""
Exceptions raised by the Champions 315 services.

The lineup state machine itself never raises; these cover bad input at
the service boundaries (roster loading, finishing a match).
"""


class Champions315Error(Exception):
    """Base class for all application errors."""
    pass


class MatchValidationError(Champions315Error):
    """Raised when a finished match cannot be saved as entered."""
    pass


class LineupNotFoundError(Champions315Error):
    """Raised when a saved lineup id is not part of the roster."""

    def __init__(self, lineup_id: str):
        super().__init__(f"Lineup not found: {lineup_id}")
        self.lineup_id = lineup_id


class RosterDataError(Champions315Error):
    """Raised when a roster document is malformed."""
    pass
