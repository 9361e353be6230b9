import pytest

from typeracer.history import MemoryHistoryLog


class FakeClock:
    """Manually advanced clock, stands in for time.monotonic / time.time."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def wall_clock():
    return FakeClock(1_700_000_000.0)


@pytest.fixture
def history():
    return MemoryHistoryLog()
