"""Blocking execution of external commands."""

from __future__ import annotations

import subprocess
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

import structlog

from .errors import CommandError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger(__name__)


class CommandRunner:
    """Runs commands synchronously with a timeout.

    Output goes to the terminal unless ``capture`` is requested.
    """

    def __init__(self, timeout: int = 3600) -> None:
        self.timeout = timeout

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        capture: bool = False,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        """Run a command.

        Args:
            cmd: Command and arguments as a list.
            cwd: Working directory for the command.
            capture: Capture stdout/stderr instead of passing them through.
            check: Raise CommandError on a non-zero exit code.

        Returns:
            The completed process.

        Raises:
            CommandError: If the command cannot be started, times out, or
                exits non-zero while ``check`` is set.
        """
        argv = [str(arg) for arg in cmd]
        log = logger.bind(command=" ".join(argv))
        log.debug("running_command", cwd=str(cwd) if cwd else None)

        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                capture_output=capture,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandError(f"Command not found: {argv[0]}", cmd=argv) from e
        except subprocess.TimeoutExpired as e:
            log.warning("command_timeout", timeout=self.timeout)
            raise CommandError(
                f"Command timed out after {self.timeout} seconds: {' '.join(argv)}", cmd=argv
            ) from e

        log.debug("command_completed", return_code=result.returncode)

        if check and result.returncode != 0:
            raise CommandError(
                f"Command failed with exit code {result.returncode}: {' '.join(argv)}",
                cmd=argv,
                return_code=result.returncode,
            )
        return result
