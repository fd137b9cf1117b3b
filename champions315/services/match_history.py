"""
Match-recording sink for finished games.

The live match hands a GameResult to a MatchRecorder when the coach saves
the game; the default recorder appends it to a JSON history file.
"""
import logging
import os
from typing import List, Protocol

from ..models import GameResult
from ..utils import now_ts
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


class MatchRecorder(Protocol):
    """Receives finished match results."""

    def record(self, result: GameResult) -> None: ...


class MatchHistoryStore:
    """Keeps finished matches in a JSON file, oldest first on disk."""

    def __init__(self, file_path: str):
        self.file_path = file_path

    def record(self, result: GameResult) -> None:
        """
        Append a result to the history file.

        Raises:
            OSError: If the file cannot be written
            json.JSONDecodeError: If the existing history is corrupt
        """
        history = self._load_raw()
        entry = result.to_dict()
        entry["savedTs"] = now_ts()
        history.append(entry)
        PersistenceService.save_json(history, self.file_path)
        logger.info(
            "Recorded match vs %s (%d-%d), %d yellow, %d red",
            result.opponent_name, result.score_home, result.score_away,
            len(result.yellow_cards), len(result.expelled_players),
        )

    def list_matches(self) -> List[GameResult]:
        """Return the saved matches, newest first."""
        return [GameResult.from_dict(entry) for entry in reversed(self._load_raw())]

    def _load_raw(self) -> list:
        if not os.path.exists(self.file_path):
            return []
        return list(PersistenceService.load_json(self.file_path))


class InMemoryMatchRecorder:
    """Recorder keeping results in a list; used when no history file is wanted."""

    def __init__(self):
        self.results: List[GameResult] = []

    def record(self, result: GameResult) -> None:
        self.results.append(result)

    def list_matches(self) -> List[GameResult]:
        return list(reversed(self.results))
