"""Tests for the rsync strategy."""

from __future__ import annotations

from unittest.mock import MagicMock

from core.models import Settings
from strategies.rsync import RsyncStrategy


class TestRsyncStrategy:
    """Tests for RsyncStrategy."""

    def test_source(self, settings: Settings, runner: MagicMock) -> None:
        strategy = RsyncStrategy(settings, runner)

        assert strategy.source == "rsync://mirror.example.org/finkinfo/10.4/"

    def test_do_direct_syncs_into_dists(self, settings: Settings, runner: MagicMock) -> None:
        strategy = RsyncStrategy(settings, runner)

        strategy.do_direct()

        assert settings.dists_dir.is_dir()
        runner.run.assert_called_once_with(
            [
                "rsync",
                "-rtz",
                "--delete-after",
                "--exclude=/local/",
                "rsync://mirror.example.org/finkinfo/10.4/",
                f"{settings.dists_dir}/",
            ],
            cwd=None,
            capture=False,
        )

    def test_clear_metadata(self, settings: Settings, runner: MagicMock) -> None:
        settings.dists_dir.mkdir(parents=True)
        (settings.dists_dir / "TIMESTAMP").write_text("1700000000")
        (settings.dists_dir / "fink.info").write_text("Package: fink")
        strategy = RsyncStrategy(settings, runner)

        strategy.clear_metadata()
        strategy.clear_metadata()

        assert not (settings.dists_dir / "TIMESTAMP").exists()
        assert (settings.dists_dir / "fink.info").exists()
