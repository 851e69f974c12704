"""
Inactivity auto-lock for an open vault.

SessionGuard counts down from a configured timeout, restarts the count on
every activity notification and calls ``on_expire`` once when the count
reaches zero. It owns every timer it schedules and releases them on
stop() and on expiry.
"""
import math
import asyncio
import time
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Protocol

import pendulum

from vaultguard.config.config_vault import SESSION_DEFAULTS
from .errors import StateError, ValidationError

logger = logging.getLogger(__name__)


# ==============================================================
# Scheduling
# ==============================================================

class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """
    Source of delayed callbacks and of the clock used to measure them.

    ``now()`` must be monotonic and in seconds.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

    def now(self) -> float: ...


class ThreadingScheduler:
    """
    Default scheduler. Each callback runs on a daemon threading.Timer so
    a pending lock never keeps the interpreter alive.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer

    def now(self) -> float:
        return time.monotonic()


class AsyncioScheduler:
    """Scheduler for hosts that already run an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)

    def now(self) -> float:
        return self.loop.time()


# ==============================================================
# State
# ==============================================================

class Phase(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True)
class SessionTimerConfig:
    """
    Timing for one guarded session.

    timeout_ms: idle time before the session expires
    tick_interval_ms: how often the countdown is refreshed
    """
    timeout_ms: int = SESSION_DEFAULTS["timeout_ms"]
    tick_interval_ms: int = SESSION_DEFAULTS["tick_interval_ms"]

    def __post_init__(self):
        for name in ("timeout_ms", "tick_interval_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValidationError(f"{name} must be greater than 0, got {value}")


@dataclass(frozen=True)
class SessionState:
    phase: Phase
    remaining_ms: int


def format_time_remaining(milliseconds: int) -> str:
    """
    Render a countdown for display.

    Rounds up to whole seconds. Shows "M:SS" from one minute upwards and
    plain seconds below that.
    """
    total_seconds = max(0, math.ceil(milliseconds / 1000))
    minutes, seconds = divmod(total_seconds, 60)
    if minutes > 0:
        return f"{minutes}:{seconds:02d}"
    return f"{seconds}"


# ==============================================================
# Guard
# ==============================================================

class SessionGuard:
    """
    Idle -> Active -> Expired state machine for vault auto-lock.

    Args:
        on_expire: Called once, with no arguments, when the session
            expires. Typically wired to a lock / re-authenticate action.
        scheduler: Timer source. Defaults to ThreadingScheduler.

    Only one tick is ever pending. Each start() opens a new run; ticks
    left over from an earlier run are recognised by their run number
    and ignored.
    """

    def __init__(self, on_expire: Callable[[], None] | None = None,
                 scheduler: Scheduler | None = None):
        self.on_expire = on_expire
        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()

        self._lock = threading.RLock()
        self._phase = Phase.IDLE
        self._config: SessionTimerConfig | None = None
        self._remaining_ms = 0
        self._active_since = 0.0
        self._run = 0
        self._handle: TimerHandle | None = None
        self.expires_at: pendulum.DateTime | None = None

    def __repr__(self):
        return (
            f"SessionGuard(phase={self._phase.value}, "
            f"remaining_ms={self._remaining_ms}, "
            f"pending_timers={self.pending_timers})"
        )

    # --- public API ---

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> SessionState:
        with self._lock:
            return SessionState(phase=self._phase, remaining_ms=self._remaining_ms)

    @property
    def pending_timers(self) -> int:
        return 0 if self._handle is None else 1

    def get_remaining(self) -> int:
        """Milliseconds left before expiry, as of the last tick or activity."""
        return self._remaining_ms

    def start(self, config: SessionTimerConfig | None = None) -> None:
        """
        Begin counting down.

        Allowed from Idle and from Expired; a second start() while Active
        must be preceded by stop().

        Raises:
            StateError: If the session is already active.
            ValidationError: If config is not a SessionTimerConfig.
        """
        config = config if config is not None else SessionTimerConfig()
        if not isinstance(config, SessionTimerConfig):
            raise ValidationError(f"Expected SessionTimerConfig, got {type(config).__name__}")

        with self._lock:
            if self._phase is Phase.ACTIVE:
                raise StateError("Session is already active; call stop() first")

            self._release()
            self._config = config
            self._run += 1
            self._remaining_ms = config.timeout_ms
            self._phase = Phase.ACTIVE
            self._mark_now()
            self._schedule_tick()

        logger.info(f"[{pendulum.now().to_iso8601_string()}] "
                    f"Session timer started: {config.timeout_ms / 1000:g} seconds")

    def notify_activity(self) -> None:
        """
        Record user activity and restart the countdown.

        Ignored unless the session is active. Calling it repeatedly has
        the same effect as calling it once.
        """
        with self._lock:
            if self._phase is not Phase.ACTIVE:
                return
            self._remaining_ms = self._config.timeout_ms
            self._mark_now()

    def stop(self) -> None:
        """Cancel any pending tick and return to Idle. Safe to repeat."""
        with self._lock:
            was = self._phase
            self._release()
            self._phase = Phase.IDLE
            self._remaining_ms = 0
            self.expires_at = None

        if was is Phase.ACTIVE:
            logger.info(f"[{pendulum.now().to_iso8601_string()}] Session timer stopped")

    @contextmanager
    def session(self, config: SessionTimerConfig | None = None) -> Iterator["SessionGuard"]:
        """Start the guard for the duration of a with-block, always stopping it."""
        self.start(config)
        try:
            yield self
        finally:
            self.stop()

    # --- internals ---

    def _mark_now(self):
        """Restart the countdown; the deadline is _active_since + timeout."""
        self._active_since = self.scheduler.now()
        self.expires_at = pendulum.now().add(
            seconds=self._remaining_ms / 1000
        )

    def _schedule_tick(self):
        """Queue the next tick, never later than the deadline."""
        delay_ms = min(self._config.tick_interval_ms, self._remaining_ms)
        run = self._run
        self._handle = self.scheduler.call_later(delay_ms / 1000, lambda: self._tick(run))

    def _release(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self, run: int) -> None:
        with self._lock:
            # Stale tick from a stopped or restarted run
            if run != self._run or self._phase is not Phase.ACTIVE:
                return

            self._handle = None
            # Expire only once now >= _active_since + timeout
            elapsed_ms = (self.scheduler.now() - self._active_since) * 1000
            left_ms = self._config.timeout_ms - elapsed_ms

            if left_ms > 0:
                self._remaining_ms = math.ceil(left_ms)
                self._schedule_tick()
                return

            self._remaining_ms = 0
            self._phase = Phase.EXPIRED
            self.expires_at = None
            callback = self.on_expire

        logger.info(f"[{pendulum.now().to_iso8601_string()}] "
                    f"Session expired due to inactivity")
        if callback is not None:
            callback()
