"""Tests for the point-release strategy."""

from __future__ import annotations

import io
import subprocess
import tarfile
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest

from core.errors import TransferError
from strategies.point import PointStrategy

if TYPE_CHECKING:
    from core.models import Settings


def _write_tarball(path: Path, files: dict[str, str]) -> None:
    with tarfile.open(path, "w:gz") as tar:
        for name, content in files.items():
            data = content.encode()
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))


def _server(runner: MagicMock, version: str, files: dict[str, str]) -> None:
    """Make the runner answer curl calls like a release server."""

    def run(cmd, **kwargs):
        if "-o" in cmd:
            _write_tarball(Path(cmd[cmd.index("-o") + 1]), files)
            return subprocess.CompletedProcess(cmd, 0, stdout="")
        return subprocess.CompletedProcess(cmd, 0, stdout=f"{version}\n")

    runner.run.side_effect = run


class TestPointStrategy:
    """Tests for PointStrategy."""

    def test_latest_version(self, settings: Settings, runner: MagicMock) -> None:
        runner.run.return_value = subprocess.CompletedProcess([], 0, stdout="0.9.0\n")

        assert PointStrategy(settings, runner).latest_version() == "0.9.0"
        runner.run.assert_called_once_with(
            ["curl", "-fsSL", "https://dl.example.org/dists/LATEST"],
            cwd=None,
            capture=True,
        )

    def test_no_version_published(self, settings: Settings, runner: MagicMock) -> None:
        with pytest.raises(TransferError, match="no release version"):
            PointStrategy(settings, runner).latest_version()

    def test_download_and_unpack(self, settings: Settings, runner: MagicMock) -> None:
        (settings.dists_dir / "local").mkdir(parents=True)
        (settings.dists_dir / "local" / "mine.info").write_text("mine")
        _server(runner, "0.9.0", {"main/fink.info": "Package: fink"})
        strategy = PointStrategy(settings, runner)

        strategy.do_direct()

        assert (settings.dists_dir / "main" / "fink.info").read_text() == "Package: fink"
        assert strategy.version_file.read_text() == "0.9.0\n"
        assert (settings.dists_dir / "local" / "mine.info").exists()
        assert not (settings.manager_root / "dists-0.9.0.tar.gz").exists()
        assert not (settings.manager_root / "dists.point").exists()

    def test_current_release_skips_download(
        self, settings: Settings, runner: MagicMock
    ) -> None:
        settings.dists_dir.mkdir(parents=True)
        (settings.dists_dir / "VERSION").write_text("0.9.0\n")
        _server(runner, "0.9.0", {})

        PointStrategy(settings, runner).do_direct()

        assert runner.run.call_count == 1

    def test_corrupt_archive(self, settings: Settings, runner: MagicMock) -> None:
        def run(cmd, **kwargs):
            if "-o" in cmd:
                Path(cmd[cmd.index("-o") + 1]).write_text("not a tarball")
                return subprocess.CompletedProcess(cmd, 0, stdout="")
            return subprocess.CompletedProcess(cmd, 0, stdout="1.0\n")

        runner.run.side_effect = run

        with pytest.raises(TransferError, match="cannot unpack dists-1.0.tar.gz"):
            PointStrategy(settings, runner).do_direct()

        assert not (settings.manager_root / "dists-1.0.tar.gz").exists()

    def test_failed_swap_keeps_local(self, settings: Settings, runner: MagicMock) -> None:
        """Test a failing tree swap reports a TransferError and keeps local/."""
        (settings.dists_dir / "local").mkdir(parents=True)
        (settings.dists_dir / "local" / "mine.info").write_text("mine")
        _server(runner, "0.9.0", {"main/fink.info": "Package: fink"})

        with (
            patch("strategies.point.swap_tree", side_effect=OSError("disk full")),
            pytest.raises(TransferError, match="updating descriptions: disk full"),
        ):
            PointStrategy(settings, runner).do_direct()

        assert (settings.dists_dir / "local" / "mine.info").read_text() == "mine"
        assert not (settings.manager_root / "dists.point").exists()

    def test_clear_metadata(self, settings: Settings, runner: MagicMock) -> None:
        settings.dists_dir.mkdir(parents=True)
        (settings.dists_dir / "VERSION").write_text("0.9.0\n")
        strategy = PointStrategy(settings, runner)

        strategy.clear_metadata()

        assert not strategy.version_file.exists()
