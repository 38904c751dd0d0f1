"""Shared fixtures for room store and API tests."""

from __future__ import annotations

from collections.abc import Iterator
import os

import pytest

from planning_poker.rooms.registry import RoomStore


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, milliseconds: int) -> int:
        self.now += milliseconds
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> RoomStore:
    """Strict store: votes are rejected while a round is revealed."""
    return RoomStore(clock=clock)


@pytest.fixture
def permissive_store(clock: FakeClock) -> RoomStore:
    return RoomStore(clock=clock, reject_votes_after_reveal=False)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Drop POKER_* overrides from the outer environment."""
    for key in list(os.environ):
        if key.startswith("POKER_"):
            monkeypatch.delenv(key, raising=False)
    yield monkeypatch
