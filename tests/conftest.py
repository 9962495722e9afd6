"""Shared pytest fixtures for studio tests."""

from __future__ import annotations

from itertools import count
from pathlib import Path

import pytest

from studio import SettingsManager, SharedServices
from studio.seeds import SeedGenerator
from studio.session import GenerationOptions, GenerationSession
from studio.status import StatusBoard


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def status_board(clock) -> StatusBoard:
    return StatusBoard(ttl=5.0, clock=clock)


@pytest.fixture
def seed_source():
    """Deterministic seed source: 1000, 2000, 3000, ..."""
    draws = count(1000, 1000)
    return lambda: next(draws)


@pytest.fixture
def session(seed_source, status_board) -> GenerationSession:
    return GenerationSession(
        seeds=SeedGenerator(source=seed_source),
        status=status_board,
        pacing_delay=0,
    )


@pytest.fixture
def options() -> GenerationOptions:
    return GenerationOptions(
        prompt_text="  A lighthouse on a cliff at dusk  ",
        style="cyberpunk",
        resolution="1536x1024",
        quality="high",
        count=4,
    )


@pytest.fixture
def settings_path(tmp_path) -> Path:
    return tmp_path / "settings.json"


@pytest.fixture
def settings_manager(settings_path) -> SettingsManager:
    return SettingsManager(settings_path)


@pytest.fixture
def services(tmp_path, settings_manager) -> SharedServices:
    services = SharedServices(app_dir=tmp_path, settings=settings_manager)
    services.session.pacing_delay = 0
    return services
