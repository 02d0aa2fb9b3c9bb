"""Installer backed by apt-get (or any compatible configured command)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from .errors import CommandError, InstallError
from .interfaces import Installer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .runner import CommandRunner

logger = structlog.get_logger(__name__)


class AptInstaller(Installer):
    """Installs packages and refreshes the index with external commands.

    Args:
        runner: Command runner used for both operations.
        install_command: Command prefix; package names are appended.
        index_update_command: Command refreshing the package index.
    """

    def __init__(
        self,
        runner: CommandRunner,
        install_command: Sequence[str] = ("apt-get", "--yes", "install"),
        index_update_command: Sequence[str] = ("apt-get", "update"),
    ) -> None:
        self.runner = runner
        self.install_command = list(install_command)
        self.index_update_command = list(index_update_command)

    def install(self, names: Sequence[str]) -> None:
        packages = list(names)
        if not packages:
            logger.debug("install_skipped", reason="no packages")
            return

        logger.info("install_started", packages=packages)
        try:
            self.runner.run([*self.install_command, *packages])
        except CommandError as e:
            raise InstallError(packages, f"Installing {', '.join(packages)} failed: {e}") from e

    def refresh_index(self) -> bool:
        try:
            self.runner.run(self.index_update_command)
        except CommandError as e:
            logger.warning("index_update_failed", error=str(e))
            return False
        return True
