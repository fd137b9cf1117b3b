"""
Utility functions for the Champions 315 live lineup manager.

This module contains common time helpers used throughout the application.
"""
import time
from datetime import date


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.
    
    Args:
        seconds: Number of seconds to format
        
    Returns:
        Formatted time string in MM:SS format
        
    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    m = seconds // 60
    s = seconds % 60
    return f"{m:02d}:{s:02d}"


def now_ts() -> float:
    """
    Get current timestamp in epoch seconds.
    
    Returns:
        Current time as floating point epoch seconds
    """
    return time.time()


def current_year() -> int:
    """Return the wall-clock year used as the default age reference."""
    return date.today().year


def today_iso() -> str:
    """Return today's date as ``YYYY-MM-DD``."""
    return date.today().isoformat()
