import logging
from datetime import datetime, timezone

import pytest

from team_sizing.session import SizingSession
from team_sizing.timer import CountdownTimer


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return SizingSession(timer=CountdownTimer(60, clock=clock))


@pytest.fixture
def fixed_now():
    return datetime(2024, 5, 1, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def package_log(caplog, monkeypatch):
    """Capture records from the team_sizing logger, which does not propagate once configured."""
    logger = logging.getLogger("team_sizing")
    monkeypatch.setattr(logger, "propagate", False)
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger="team_sizing")
    yield caplog
    logger.removeHandler(caplog.handler)
