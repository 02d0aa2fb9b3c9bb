"""Shared test fixtures for core tests."""

from __future__ import annotations

import pytest

from core.testing import FakeStrategy


@pytest.fixture
def events() -> list[str]:
    """Shared call log for strategies and collaborators."""
    return []


@pytest.fixture
def strategies(events: list[str]) -> dict[str, FakeStrategy]:
    """The three built-in method names backed by fakes, in registration order."""
    return {name: FakeStrategy(name, events) for name in ("rsync", "cvs", "point")}
