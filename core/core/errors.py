"""Exception hierarchy for the self-update workflow.

Every fatal condition of a run is a subclass of :class:`SelfUpdateError`,
which the CLI turns into a diagnostic and a non-zero exit status.
A user declining a method change is not an error and has no exception.
"""

from __future__ import annotations


class SelfUpdateError(Exception):
    """Base exception for all self-update errors."""


class ConfigError(SelfUpdateError):
    """Configuration file could not be read or written."""


class UnknownMethodError(SelfUpdateError):
    """Requested update method has no registered strategy."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Selfupdate method '{method}' is not implemented")


class StrategyUnavailableError(SelfUpdateError):
    """Strategy system check failed (e.g. required tool missing)."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Selfupdate method '{method}' cannot be used")


class CommandError(SelfUpdateError):
    """External command failed to start or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        cmd: list[str] | None = None,
        return_code: int | None = None,
    ) -> None:
        self.cmd = cmd or []
        self.return_code = return_code
        super().__init__(message)


class TransferError(SelfUpdateError):
    """Strategy failed to refresh the description collection."""

    def __init__(self, method: str, message: str) -> None:
        self.method = method
        super().__init__(f"selfupdate via {method} failed: {message}")


class InstallError(SelfUpdateError):
    """Installer failed to bring packages up to date."""

    def __init__(self, packages: list[str], message: str) -> None:
        self.packages = packages
        super().__init__(message)


class ReexecError(SelfUpdateError):
    """Replacing the process with the freshly installed manager failed."""
