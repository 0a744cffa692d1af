"""Clock service for the Courtside game tracker."""

import logging
import threading
from typing import Callable, List, Optional, Tuple

from ..models import ClockState, EventLog, LeagueConfig, overtime_number
from ..utils import TICK_INTERVAL_SECONDS, OVERTIME_PREFIX, fmt_mmss
from ..utils.constants import MAX_CLOCK_SECONDS
from .errors import InvalidClockTimeError, InvalidPeriodError

logger = logging.getLogger(__name__)


class ThreadTicker:
    """
    Calls a function once per interval on a daemon thread until cancelled.

    A ticker is started when the clock enters Running and cancelled when it
    leaves Running, so at most one tick loop exists per clock.
    """

    def __init__(self, interval: float = TICK_INTERVAL_SECONDS):
        self.interval = interval
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()
        self._stopped: List[threading.Thread] = []

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stop.is_set()

    def start(self, callback: Callable[[], None]) -> None:
        if self.is_running:
            return
        self._stop = threading.Event()
        stop = self._stop
        self._thread = threading.Thread(
            target=self._run, args=(callback, stop), name="courtside-clock", daemon=True
        )
        self._thread.start()

    def cancel(self) -> None:
        """Signal the tick loop to stop without waiting for it."""
        self._stop.set()
        if self._thread is not None:
            self._stopped.append(self._thread)
        self._thread = None

    def join(self) -> None:
        """Wait for cancelled tick loops to exit. Call without holding the clock lock."""
        stopped, self._stopped = self._stopped, []
        for thread in stopped:
            # A tick that reaches zero cancels from inside the ticker thread
            if thread is not threading.current_thread():
                thread.join(timeout=self.interval * 2)

    def _run(self, callback: Callable[[], None], stop: threading.Event) -> None:
        while not stop.wait(self.interval):
            try:
                callback()
            except Exception:
                logger.exception("Clock tick failed")
                stop.set()


class ManualTicker:
    """
    Ticker driven by explicit calls to ``fire`` instead of a thread.

    Used when the background clock thread is disabled and for replaying a
    clock deterministically.
    """

    def __init__(self):
        self._callback: Optional[Callable[[], None]] = None

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def cancel(self) -> None:
        self._callback = None

    def join(self) -> None:
        pass

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self._callback is None:
                return
            self._callback()


def initial_clock_state(league: LeagueConfig, event_log: Optional[EventLog] = None) -> ClockState:
    """
    Build the starting clock for a session.

    Resumes from the stamp of the most recently recorded event when the log
    has any, otherwise the first regular period at full duration. The clock
    always starts paused.
    """
    latest = event_log.latest() if event_log is not None else None
    if latest is not None:
        return ClockState(running=False, seconds_remaining=latest.clock_seconds, period=latest.period)
    first = league.regular_periods[0]
    return ClockState(running=False, seconds_remaining=league.duration_for_period(first), period=first)


class ClockService:
    """
    Running/Paused state machine over a ClockState.

    Mutations from commands and from the ticker are serialised by a
    re-entrant lock. Reaching zero pauses the clock and cancels the ticker;
    the period is never advanced automatically.
    """

    def __init__(
        self,
        state: ClockState,
        league: LeagueConfig,
        ticker: Optional[ThreadTicker] = None,
        on_period_end: Optional[Callable[[str], None]] = None,
    ):
        self.state = state
        self.league = league
        self.ticker = ticker if ticker is not None else ThreadTicker()
        self.on_period_end = on_period_end
        self._lock = threading.RLock()
        # A restored clock always comes back paused
        self.state.running = False

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def toggle(self) -> ClockState:
        """Switch between Running and Paused."""
        with self._lock:
            if self.state.running:
                self._pause_locked()
            else:
                self.start()
            snapshot = self.snapshot()
        self.ticker.join()
        return snapshot

    def start(self) -> None:
        with self._lock:
            if self.state.running:
                return
            if self.state.seconds_remaining <= 0:
                raise InvalidClockTimeError("Clock is at 00:00; change the period or edit the time")
            self.state.running = True
            self.ticker.start(self.tick)
            logger.info("Clock started in %s at %s", self.state.period, fmt_mmss(self.state.seconds_remaining))

    def pause(self) -> None:
        with self._lock:
            self._pause_locked()
        self.ticker.join()

    def _pause_locked(self) -> None:
        if not self.state.running:
            return
        self.state.running = False
        self.ticker.cancel()
        logger.info("Clock paused in %s at %s", self.state.period, fmt_mmss(self.state.seconds_remaining))

    def change_period(self, period: str) -> ClockState:
        """Move to a period, reset to its full duration, and pause."""
        if not self.league.is_valid_period(period):
            raise InvalidPeriodError(f"Invalid period for {self.league.period_type}: {period}")
        with self._lock:
            self._pause_locked()
            self.state.period = period
            self.state.seconds_remaining = self.league.duration_for_period(period)
            logger.info("Period changed to %s", period)
            snapshot = self.snapshot()
        self.ticker.join()
        return snapshot

    def edit_time(self, seconds: int) -> ClockState:
        """Set the remaining seconds manually and pause."""
        try:
            seconds = int(seconds)
        except (TypeError, ValueError):
            raise InvalidClockTimeError(f"Invalid clock time: {seconds!r}")
        if not 0 <= seconds <= MAX_CLOCK_SECONDS:
            raise InvalidClockTimeError(
                f"Clock time must be between 00:00 and {fmt_mmss(MAX_CLOCK_SECONDS)}"
            )
        with self._lock:
            self._pause_locked()
            self.state.seconds_remaining = seconds
            logger.info("Clock set to %s in %s", fmt_mmss(seconds), self.state.period)
            snapshot = self.snapshot()
        self.ticker.join()
        return snapshot

    def tick(self) -> None:
        """Advance one second; called by the ticker while Running."""
        period_ended = False
        with self._lock:
            if not self.state.running or self.state.seconds_remaining <= 0:
                return
            self.state.seconds_remaining -= 1
            if self.state.seconds_remaining == 0:
                self.state.running = False
                self.ticker.cancel()
                period_ended = True
                logger.info("End of %s", self.state.period)
        if period_ended and self.on_period_end is not None:
            self.on_period_end(self.state.period)

    def shutdown(self) -> None:
        """Stop the ticker on session teardown."""
        with self._lock:
            self.state.running = False
            self.ticker.cancel()
        self.ticker.join()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def snapshot(self) -> ClockState:
        with self._lock:
            return ClockState(
                running=self.state.running,
                seconds_remaining=self.state.seconds_remaining,
                period=self.state.period,
            )

    def stamp(self) -> Tuple[str, int]:
        """Return the (period, seconds remaining) stamp for a new event."""
        with self._lock:
            return self.state.period, self.state.seconds_remaining

    def period_options(self, event_log: Optional[EventLog] = None) -> List[str]:
        """Regular periods plus OT1 up to one past the highest overtime seen."""
        highest = overtime_number(self.state.period)
        for period in (event_log.periods() if event_log is not None else []):
            highest = max(highest, overtime_number(period))
        overtimes = [f"{OVERTIME_PREFIX}{n}" for n in range(1, highest + 2)]
        return self.league.regular_periods + overtimes
