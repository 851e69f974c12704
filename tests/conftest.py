"""Shared pytest fixtures and test helpers for vaultguard tests."""

from __future__ import annotations

import random
from fractions import Fraction
from collections.abc import Callable

import pytest


class FakeTimer:
    def __init__(self, due: Fraction, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock. Timers only fire inside advance_ms().

    Time is an exact Fraction of a second with microsecond resolution, so
    due times compare exactly and ``ms`` can be compared with plain ints.
    """

    def __init__(self) -> None:
        self.time = Fraction(0)
        self.timers: list[FakeTimer] = []

    @property
    def ms(self) -> Fraction:
        return self.time * 1000

    def now(self) -> Fraction:
        return self.time

    def due_time(self, delay: float) -> Fraction:
        return self.time + Fraction(round(delay * 1_000_000), 1_000_000)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.due_time(delay), callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance_ms(self, ms: int | Fraction) -> None:
        target = self.time + Fraction(ms) / 1000
        while True:
            due = [t for t in self.live if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.time = max(self.time, timer.due)
            timer.fired = True
            timer.callback()
        self.time = target


class EarlyScheduler(FakeScheduler):
    """Wakes every timer ``early_us`` microseconds before it is due."""

    def __init__(self, early_us: int) -> None:
        super().__init__()
        self.early = Fraction(early_us, 1_000_000)

    def due_time(self, delay: float) -> Fraction:
        return max(self.time, super().due_time(delay) - self.early)


class LeakyScheduler(FakeScheduler):
    """Ignores cancel(), so stale callbacks still run."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = super().call_later(delay, callback)
        timer.cancel = lambda: None  # type: ignore[method-assign]
        return timer


class ExpiryRecorder:
    def __init__(self) -> None:
        self.calls: list[Fraction] = []
        self.scheduler: FakeScheduler | None = None

    def __call__(self) -> None:
        self.calls.append(self.scheduler.ms if self.scheduler else -1)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def on_expire(scheduler: FakeScheduler) -> ExpiryRecorder:
    recorder = ExpiryRecorder()
    recorder.scheduler = scheduler
    return recorder


@pytest.fixture
def seeded_rng() -> random.Random:
    """Repeatable random source for tests that compare exact output."""
    return random.Random(1234)


@pytest.fixture
def leaky_scheduler() -> LeakyScheduler:
    return LeakyScheduler()


@pytest.fixture
def early_scheduler() -> Callable[[int], EarlyScheduler]:
    """Factory for schedulers whose timers fire a little ahead of time."""
    return EarlyScheduler
