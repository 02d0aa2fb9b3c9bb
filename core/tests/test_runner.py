"""Tests for the external command boundary: runner, installer and exec."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from core.errors import CommandError, InstallError
from core.installer import AptInstaller
from core.process import ExecProcessControl
from core.runner import CommandRunner


class TestCommandRunner:
    """Tests for CommandRunner."""

    def test_run_success(self) -> None:
        completed = subprocess.CompletedProcess(["echo", "hi"], 0, stdout="hi\n", stderr="")
        with patch("core.runner.subprocess.run", return_value=completed) as mock_run:
            result = CommandRunner(timeout=5).run(
                ["echo", Path("hi")], cwd=Path("/tmp"), capture=True
            )

        assert result.stdout == "hi\n"
        mock_run.assert_called_once_with(
            ["echo", "hi"],
            cwd=Path("/tmp"),
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )

    def test_non_zero_exit_raises(self) -> None:
        completed = subprocess.CompletedProcess(["false"], 2, stdout="", stderr="")
        with (
            patch("core.runner.subprocess.run", return_value=completed),
            pytest.raises(CommandError) as exc_info,
        ):
            CommandRunner().run(["false"])

        assert exc_info.value.return_code == 2
        assert exc_info.value.cmd == ["false"]

    def test_non_zero_exit_unchecked(self) -> None:
        completed = subprocess.CompletedProcess(["false"], 1, stdout="", stderr="")
        with patch("core.runner.subprocess.run", return_value=completed):
            result = CommandRunner().run(["false"], check=False)

        assert result.returncode == 1

    def test_missing_command(self) -> None:
        with (
            patch("core.runner.subprocess.run", side_effect=FileNotFoundError("rsync")),
            pytest.raises(CommandError, match="Command not found: rsync"),
        ):
            CommandRunner().run(["rsync", "-a"])

    def test_timeout(self) -> None:
        error = subprocess.TimeoutExpired(["cvs"], 10)
        with (
            patch("core.runner.subprocess.run", side_effect=error),
            pytest.raises(CommandError, match="timed out after 10 seconds"),
        ):
            CommandRunner(timeout=10).run(["cvs", "update"])


class TestAptInstaller:
    """Tests for AptInstaller."""

    def test_install_appends_names(self) -> None:
        runner = MagicMock()
        installer = AptInstaller(runner)

        installer.install(["fink", "dpkg"])

        runner.run.assert_called_once_with(["apt-get", "--yes", "install", "fink", "dpkg"])

    def test_install_nothing(self) -> None:
        runner = MagicMock()

        AptInstaller(runner).install([])

        runner.run.assert_not_called()

    def test_install_failure(self) -> None:
        runner = MagicMock()
        runner.run.side_effect = CommandError("exit 100", cmd=["apt-get"], return_code=100)

        with pytest.raises(InstallError, match="Installing fink failed"):
            AptInstaller(runner).install(["fink"])

    def test_custom_commands(self) -> None:
        runner = MagicMock()
        installer = AptInstaller(
            runner,
            install_command=["sudo", "apt-get", "install"],
            index_update_command=["sudo", "apt-get", "update"],
        )

        installer.install(["fink"])
        assert installer.refresh_index() is True

        assert runner.run.call_args_list[0].args[0] == ["sudo", "apt-get", "install", "fink"]
        assert runner.run.call_args_list[1].args[0] == ["sudo", "apt-get", "update"]

    def test_refresh_index_failure(self) -> None:
        runner = MagicMock()
        runner.run.side_effect = CommandError("exit 1", cmd=["apt-get", "update"], return_code=1)

        assert AptInstaller(runner).refresh_index() is False


class TestExecProcessControl:
    """Tests for ExecProcessControl."""

    def test_replace_returns_error(self) -> None:
        error = OSError(2, "No such file or directory")
        with patch("core.process.os.execv", side_effect=error) as mock_execv:
            result = ExecProcessControl().replace(
                "/sw/bin/fink", ["/sw/bin/fink", "selfupdate-finish"]
            )

        assert result is error
        mock_execv.assert_called_once_with("/sw/bin/fink", ["/sw/bin/fink", "selfupdate-finish"])
