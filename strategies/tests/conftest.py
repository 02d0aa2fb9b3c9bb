"""Shared test fixtures for strategy tests."""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from core.models import Settings

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temporary Basepath."""
    return Settings.model_validate(
        {
            "Basepath": str(tmp_path / "sw"),
            "Mirror-rsync": "rsync://mirror.example.org/finkinfo/",
            "Distribution": "10.4",
            "PointURL": "https://dl.example.org/dists/",
        }
    )


@pytest.fixture
def runner() -> MagicMock:
    """Command runner double that succeeds with empty output."""
    runner = MagicMock()
    runner.run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="")
    return runner
