from __future__ import annotations

import pytest

from tests.tilepuzzle.helpers import FakeClock, FirstIndexRandom, RecordingSurface, SizedImage
from tilepuzzle.app.session import PuzzleSession
from tilepuzzle.runtime.scheduler import Scheduler


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(fake_clock: FakeClock) -> Scheduler:
    return Scheduler(time_source=fake_clock)


@pytest.fixture
def recording_surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def image() -> SizedImage:
    return SizedImage(300.0, 300.0)


@pytest.fixture
def session_factory(scheduler: Scheduler, recording_surface: RecordingSurface):
    def _make(**overrides) -> tuple[PuzzleSession, list[str]]:
        messages: list[str] = []
        kwargs = {
            "surface": recording_surface,
            "notification_sink": messages.append,
            "rng": FirstIndexRandom(),
            "scheduler": scheduler,
            "frame_interval_seconds": 0.02,
            "notify_delay_seconds": 0.5,
        }
        kwargs.update(overrides)
        return PuzzleSession(**kwargs), messages

    return _make
