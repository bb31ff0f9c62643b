"""Testing fakes – FakeClock for registration timestamps."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from starflight.kernel.time import FrozenClock

FAKE_EPOCH = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock(FrozenClock):
    """Clock for coordinator tests.

    Starts at :data:`FAKE_EPOCH`. With *step* set, every ``now()`` call
    returns the current instant and then moves forward, so consecutive
    registrations get distinct timestamps without manual ``advance`` calls.
    """

    def __init__(self, start: datetime = FAKE_EPOCH, *, step: timedelta | None = None) -> None:
        super().__init__(start)
        self._step = step
        self.reads = 0

    def now(self) -> datetime:
        current = super().now()
        self.reads += 1
        if self._step:
            self.advance(seconds=self._step.total_seconds())
        return current

    def set(self, moment: datetime) -> None:
        self._fixed = moment


__all__ = ["FAKE_EPOCH", "FakeClock"]
