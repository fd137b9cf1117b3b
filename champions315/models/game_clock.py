"""
GameClock model for the Champions 315 live lineup manager.

This module contains the GameClock dataclass which represents the match
clock: current period, seconds elapsed in it, and pause bookkeeping.
"""
from dataclasses import dataclass
from typing import Optional

from ..utils import fmt_mmss


@dataclass
class GameClock:
    """
    Represents the state of the match clock.
    
    Attributes:
        period: Current period (1-based)
        elapsed: Seconds elapsed in the current period
        running: Whether the clock is ticking
        pause_count: How many times the clock was stopped in this period
        total_paused_time: Seconds spent paused in this period
        paused_at_ts: When the clock was last stopped (epoch seconds)
    """
    period: int = 1
    elapsed: int = 0
    running: bool = False
    pause_count: int = 0
    total_paused_time: int = 0
    paused_at_ts: Optional[float] = None

    def reset_period(self, period: int) -> None:
        """Zero all period counters and move to ``period``."""
        self.period = period
        self.elapsed = 0
        self.running = False
        self.pause_count = 0
        self.total_paused_time = 0
        self.paused_at_ts = None

    def to_json(self) -> dict:
        """
        Convert GameClock to JSON-serializable dictionary.
        
        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "period": self.period,
            "elapsed": self.elapsed,
            "running": self.running,
            "formatted": fmt_mmss(self.elapsed),
            "pauseCount": self.pause_count,
            "totalPausedTime": self.total_paused_time,
            "formattedPausedTime": fmt_mmss(self.total_paused_time),
        }
