"""Countdown timer for a sizing round: Idle -> Running -> Expired."""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from .config import DEFAULT_DURATION, TICK_SECONDS, TIMER_DURATIONS

log = logging.getLogger(__name__)


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


def format_time(seconds: int) -> str:
    """Render seconds as m:ss."""
    mins, secs = divmod(max(int(seconds), 0), 60)
    return f"{mins}:{secs:02d}"


class CountdownTimer:
    """
    One-second countdown that calls on_expire exactly once when it reaches zero.

    The timer does not schedule anything itself. The caller drives it with
    tick(), or with catch_up() from a periodic refresh, and stops scheduling
    refreshes as soon as `active` is False.
    """

    def __init__(
        self,
        duration: int = DEFAULT_DURATION,
        on_expire: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if duration not in TIMER_DURATIONS:
            raise ValueError(f"Unsupported timer duration: {duration}")
        self.duration = duration
        self.remaining = duration
        self.state = TimerState.IDLE
        self.on_expire = on_expire
        self._clock = clock
        self._last_tick: Optional[float] = None

    @property
    def active(self) -> bool:
        return self.state is TimerState.RUNNING

    @property
    def idle(self) -> bool:
        return self.state is TimerState.IDLE

    @property
    def expired(self) -> bool:
        return self.state is TimerState.EXPIRED

    def set_duration(self, duration: int) -> bool:
        """Change the configured duration. Only allowed while idle."""
        if not self.idle:
            log.debug("Duration change to %s rejected: timer is %s", duration, self.state.value)
            return False
        if duration not in TIMER_DURATIONS:
            raise ValueError(f"Unsupported timer duration: {duration}")
        self.duration = duration
        self.remaining = duration
        return True

    def start(self) -> bool:
        if not self.idle:
            return False
        self.state = TimerState.RUNNING
        self._last_tick = self._clock()
        log.info("Timer started (%ss)", self.duration)
        return True

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self.active:
            return
        self.remaining = max(self.remaining - TICK_SECONDS, 0)
        if self.remaining == 0:
            self._expire()

    def catch_up(self, now: Optional[float] = None) -> int:
        """Apply one tick per whole second elapsed since the last tick. Returns ticks applied."""
        if not self.active or self._last_tick is None:
            return 0
        now = self._clock() if now is None else now
        due = int((now - self._last_tick) // TICK_SECONDS)
        applied = 0
        while applied < due and self.active:
            self.tick()
            applied += 1
        if self.active:
            self._last_tick += applied * TICK_SECONDS
        return applied

    def reset(self) -> None:
        self.state = TimerState.IDLE
        self.remaining = self.duration
        self._last_tick = None

    def _expire(self) -> None:
        self.state = TimerState.EXPIRED
        self._last_tick = None
        log.info("Timer expired")
        if self.on_expire is not None:
            self.on_expire()
