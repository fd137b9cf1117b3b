"""
Undo/redo history for a live lineup session.

Lineup states are immutable, so each history entry simply keeps the state
before and after an applied operation.
"""
from dataclasses import dataclass
from typing import List, Optional

from ..models import LineupState
from ..utils import MAX_SESSION_HISTORY


@dataclass(frozen=True)
class HistoryEntry:
    """One applied operation and the states around it."""
    description: str
    before: LineupState
    after: LineupState


class SessionHistory:
    """
    Tracks applied lineup operations with undo/redo support.
    
    Recording a new entry after an undo discards the redo tail.
    """
    
    def __init__(self, max_history: int = MAX_SESSION_HISTORY):
        """
        Initialize the history.
        
        Args:
            max_history: Maximum number of entries to keep
        """
        self.max_history = max_history
        self._entries: List[HistoryEntry] = []
        self._current_index = -1
    
    def record(self, description: str, before: LineupState, after: LineupState) -> None:
        """Record an applied operation."""
        self._entries = self._entries[:self._current_index + 1]
        self._entries.append(HistoryEntry(description, before, after))
        self._current_index += 1
        
        if len(self._entries) > self.max_history:
            self._entries.pop(0)
            self._current_index -= 1
    
    def undo(self) -> Optional[HistoryEntry]:
        """
        Step back one entry.
        
        Returns:
            The undone entry (restore its ``before``), or None if nothing to undo
        """
        if not self.can_undo():
            return None
        entry = self._entries[self._current_index]
        self._current_index -= 1
        return entry
    
    def redo(self) -> Optional[HistoryEntry]:
        """
        Step forward one entry.
        
        Returns:
            The redone entry (restore its ``after``), or None if nothing to redo
        """
        if not self.can_redo():
            return None
        self._current_index += 1
        return self._entries[self._current_index]
    
    def can_undo(self) -> bool:
        return self._current_index >= 0
    
    def can_redo(self) -> bool:
        return self._current_index < len(self._entries) - 1
    
    def descriptions(self) -> List[str]:
        """Get history of applied operation descriptions."""
        return [entry.description for entry in self._entries[:self._current_index + 1]]
    
    def clear(self) -> None:
        self._entries.clear()
        self._current_index = -1
