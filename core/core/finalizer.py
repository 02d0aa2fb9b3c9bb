"""Finalization after the description collection has been refreshed.

Finalization runs in two phases:

- ``do_finish``: refresh the binary index, reload package metadata and, if
  a newer package manager is available, install it and replace this
  process with the new binary running ``selfupdate-finish``.
- ``finish``: bring the essential packages up to date. It runs in the same
  process when the manager was already current, otherwise in the
  re-executed one.

Once a new manager is installed the old in-memory code may no longer match
what is on disk, so nothing beyond the manager's own package is touched
before the process is replaced.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import structlog

from .errors import ReexecError

if TYPE_CHECKING:
    from .context import SelfUpdateContext

logger = structlog.get_logger(__name__)

FINISH_COMMAND = "selfupdate-finish"


class Finalizer:
    """Reconciles installed packages with the refreshed descriptions."""

    def __init__(
        self,
        context: SelfUpdateContext,
        interpreter_version: tuple[int, int] | None = None,
    ) -> None:
        """Initialize the finalizer.

        Args:
            context: Configuration and collaborators for the run.
            interpreter_version: ``(major, minor)`` of the running interpreter.
                Defaults to ``sys.version_info``.
        """
        self._ctx = context
        self.interpreter_version = interpreter_version or (
            sys.version_info.major,
            sys.version_info.minor,
        )
        self._log = logger.bind(component="finalizer")

    def do_finish(self) -> None:
        """Refresh package state and upgrade the package manager first if needed.

        Raises:
            InstallError: If installing the new package manager fails.
            ReexecError: If the new package manager could not be started.
        """
        ctx = self._ctx

        if not ctx.installer.refresh_index():
            self._log.warning("index_refresh_failed")
            ctx.ui.warning("Running 'fink scanpackages' may fix indexing problems.")

        ctx.database.forget_all()
        ctx.database.reload_all()

        name = ctx.settings.manager_package
        package = ctx.database.lookup(name)
        if package is None:
            self._log.warning("manager_package_unknown", package=name)
        elif not package.is_installed():
            self._log.info("manager_upgrade_started", package=name)
            ctx.installer.install([name])
            self._reexec()
            return

        self.finish()

    def _reexec(self) -> None:
        executable = str(self._ctx.settings.executable)
        self._ctx.ui.notice("Re-executing fink to use the new version...")
        self._log.info("reexec", executable=executable)

        error = self._ctx.process.replace(executable, [executable, FINISH_COMMAND])

        self._log.error("reexec_failed", executable=executable, error=str(error))
        raise ReexecError(
            f"re-executing {executable} failed, run '{executable} {FINISH_COMMAND}' manually"
        )

    def additional_packages(self) -> tuple[list[str], bool]:
        """Return the important package list and whether the interpreter is supported.

        The running interpreter is supported when the database knows its
        package; that package is then part of the important list.
        """
        settings = self._ctx.settings
        major, minor = self.interpreter_version
        interpreter = settings.interpreter_package.format(major=major, minor=minor)

        important = list(settings.important_packages)
        supported = self._ctx.database.lookup(interpreter) is not None
        if supported:
            important.append(interpreter)
        return important, supported

    def essential_packages(self) -> list[str]:
        """Compute the Essential Package Set.

        Essential packages plus every important package of which some
        version is installed, without duplicates.
        """
        database = self._ctx.database
        elist = list(database.list_essential())

        important, supported = self.additional_packages()
        if not supported:
            major, minor = self.interpreter_version
            self._log.warning("interpreter_unsupported", version=f"{major}.{minor}")
            self._ctx.ui.warning(
                f"WARNING! This version of Python ({major}.{minor}) is not currently "
                "supported by Fink. Updating anyway, but you may encounter problems."
            )

        for name in important:
            package = database.lookup(name)
            # only worry about "important" ones that are already installed
            if package is not None and package.is_any_installed():
                elist.append(name)

        return list(dict.fromkeys(elist))

    def finish(self) -> None:
        """Update the essential packages and tell the user what happened.

        Raises:
            InstallError: If the batch installation fails.
        """
        elist = self.essential_packages()
        self._log.info("essential_update_started", packages=elist)
        self._ctx.installer.install(elist)

        self._ctx.ui.notice(
            "The core packages have been updated. You should now update the other "
            "packages using commands like 'fink update-all'."
        )
