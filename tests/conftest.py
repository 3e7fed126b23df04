import pytest

from logconsole.settings import ConsoleSettings
from logconsole.core import LogStore


class FakeClock:
    """Manually advanced monotonic clock (seconds)"""

    def __init__(self, start_ms: int = 100_000):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms / 1000.0

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return ConsoleSettings(history_limit=50, shown_limit=10)


@pytest.fixture
def store(settings, clock):
    return LogStore(settings, clock=clock, context_provider=lambda: "Main")
