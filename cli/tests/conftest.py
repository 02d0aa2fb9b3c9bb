"""Shared test fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_config_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Isolate tests from the real user configuration.

    Sets XDG_CONFIG_HOME to a temporary directory and clears
    FINK_SELFUPDATE_CONFIG so that tests never read or write
    ~/.config/fink-selfupdate/config.yaml.

    This fixture is applied automatically to all tests in this module.
    """
    config_home = tmp_path / "xdg_config"
    config_home.mkdir(parents=True, exist_ok=True)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("FINK_SELFUPDATE_CONFIG", raising=False)

    yield config_home


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo structlog configuration bound to a CliRunner stream by earlier tests."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
