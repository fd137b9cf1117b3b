"""Timer service for the Champions 315 live lineup manager."""

import logging
import threading
from typing import Callable, Optional, Protocol

from ..models import GameClock
from ..utils import (
    fmt_mmss, now_ts, PERIOD_DURATION_SECONDS, TICK_INTERVAL_SECONDS, TOTAL_PERIODS
)

logger = logging.getLogger(__name__)


class Ticker(Protocol):
    """Something that calls back periodically once started."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


class ClockTicker:
    """Daemon thread calling ``callback`` once per ``interval`` seconds."""

    def __init__(self, callback: Callable[[], None], interval: float = TICK_INTERVAL_SECONDS):
        self._callback = callback
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="match-clock", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            self._callback()


class TimerService:
    """Service for the match clock: periods, elapsed seconds and pauses."""

    def __init__(
        self,
        clock: Optional[GameClock] = None,
        ticker_factory: Callable[[Callable[[], None]], Ticker] = ClockTicker,
    ):
        """
        Args:
            clock: Clock state to manage (a fresh one by default)
            ticker_factory: Builds the ticker driving :meth:`tick`
        """
        self.clock = clock or GameClock()
        self._lock = threading.RLock()
        self._ticker = ticker_factory(self.tick)

    # ------------------------------------------------------------------
    # Core timer controls
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Start or resume the clock. Ignored while already running."""

        with self._lock:
            if self.clock.running:
                return

            if self.clock.paused_at_ts is not None:
                paused_for = round(now_ts() - self.clock.paused_at_ts)
                self.clock.total_paused_time += max(0, int(paused_for))
                self.clock.paused_at_ts = None

            self.clock.running = True
            self._ticker.start()
        logger.info("Clock started (period %d at %s)", self.clock.period, self.formatted())

    def stop(self) -> None:
        """Stop the clock and count a pause. Safe to call when stopped."""

        with self._lock:
            self._ticker.stop()
            if not self.clock.running:
                return
            self.clock.running = False
            self.clock.paused_at_ts = now_ts()
            self.clock.pause_count += 1
        logger.info("Clock stopped (period %d at %s)", self.clock.period, self.formatted())

    def tick(self, seconds: int = 1) -> None:
        """Advance the clock while it is running."""

        with self._lock:
            if self.clock.running:
                self.clock.elapsed += seconds

    def next_period(self) -> None:
        """Stop the clock and move to the next period from 00:00."""

        with self._lock:
            self.stop()
            self.clock.reset_period(min(self.clock.period + 1, TOTAL_PERIODS))

    def set_period(self, period: int) -> None:
        """Jump to a given period (clamped to the valid range) from 00:00."""

        with self._lock:
            self.stop()
            self.clock.reset_period(max(1, min(int(period), TOTAL_PERIODS)))

    def reset(self) -> None:
        """Back to the first period at 00:00."""

        with self._lock:
            self.stop()
            self.clock.reset_period(1)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self.clock.running

    def formatted(self) -> str:
        return fmt_mmss(self.clock.elapsed)

    def formatted_paused_time(self) -> str:
        return fmt_mmss(self.clock.total_paused_time)

    def is_period_over(self) -> bool:
        """Return True once the current period has run its full length."""
        return self.clock.elapsed >= PERIOD_DURATION_SECONDS

    def to_dict(self) -> dict:
        with self._lock:
            data = self.clock.to_json()
        data.update({
            "periodDuration": PERIOD_DURATION_SECONDS,
            "totalPeriods": TOTAL_PERIODS,
            "periodOver": self.is_period_over(),
        })
        return data
