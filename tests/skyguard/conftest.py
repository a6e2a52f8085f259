"""Shared fixtures for SkyGuard tests."""

from __future__ import annotations

import random

import pytest

from skyguard.comms.event_bus import EventBus


class ManualClock:
    """Controllable stand-in for ``time.time``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns ``value``."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def bus() -> EventBus:
    return EventBus(maxsize=10_000)


@pytest.fixture
def fixed_random():
    """Factory: ``fixed_random(0.1)`` -> a Random whose ``random()`` is 0.1."""
    return FixedRandom
