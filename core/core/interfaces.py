"""Core interfaces for the self-update workflow.

This module defines abstract base classes for the collaborators the
selector, orchestrator and finalizer drive: update strategies, the
package database, the installer, process control and the user interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class UpdateStrategy(ABC):
    """Abstract base class for description-collection update strategies.

    Each strategy owns its stamp and its metadata; the orchestrator never
    touches either directly.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the method identifier (lower case).

        Returns:
            Unique strategy identifier, e.g. ``rsync``.
        """
        ...

    @property
    def description(self) -> str:
        """Return the label shown when the user chooses a method."""
        return self.name

    @abstractmethod
    def system_check(self) -> bool:
        """Check whether this strategy can be used on this system.

        Returns:
            True if the strategy is usable, False otherwise.
        """
        ...

    @abstractmethod
    def do_direct(self) -> None:
        """Refresh the description collection.

        Raises:
            TransferError: If the transfer fails.
        """
        ...

    @abstractmethod
    def stamp_set(self) -> None:
        """Mark this strategy as the authoritative, current one."""
        ...

    @abstractmethod
    def stamp_clear(self) -> None:
        """Remove this strategy's stamp."""
        ...

    @abstractmethod
    def clear_metadata(self) -> None:
        """Remove metadata this strategy keeps in the description tree."""
        ...


class Package(ABC):
    """A package entry as known to the package database."""

    name: str

    @abstractmethod
    def is_installed(self) -> bool:
        """Return True if the newest available version is installed."""
        ...

    @abstractmethod
    def is_any_installed(self) -> bool:
        """Return True if any version of the package is installed."""
        ...


class PackageDatabase(ABC):
    """In-memory view of available and installed packages."""

    @abstractmethod
    def forget_all(self) -> None:
        """Drop all loaded package metadata."""
        ...

    @abstractmethod
    def reload_all(self) -> None:
        """Load package metadata from the refreshed descriptions."""
        ...

    @abstractmethod
    def lookup(self, name: str) -> Package | None:
        """Find a package by name.

        Args:
            name: Package name.

        Returns:
            The package, or None if the database does not know it.
        """
        ...

    @abstractmethod
    def list_essential(self) -> list[str]:
        """Return the names of all essential packages."""
        ...


class Installer(ABC):
    """Installs packages and maintains the binary package index."""

    @abstractmethod
    def install(self, names: Sequence[str]) -> None:
        """Install or update the given packages in one batch.

        Raises:
            InstallError: If the installation fails.
        """
        ...

    @abstractmethod
    def refresh_index(self) -> bool:
        """Refresh the binary package index.

        Returns:
            True on success, False otherwise.
        """
        ...


class ProcessControl(ABC):
    """Boundary for replacing the running process."""

    @abstractmethod
    def replace(self, executable: str, args: Sequence[str]) -> OSError | None:
        """Replace the current process image.

        Does not return on success.

        Args:
            executable: Program to run.
            args: Full argument vector, including ``argv[0]``.

        Returns:
            The error that prevented the replacement.
        """
        ...


class UserInterface(ABC):
    """Interactive prompts and line-wrapped messages for the operator."""

    @abstractmethod
    def notice(self, text: str) -> None:
        """Show an informational message."""
        ...

    @abstractmethod
    def warning(self, text: str) -> None:
        """Show a non-fatal warning."""
        ...

    @abstractmethod
    def select(
        self,
        question: str,
        choices: Sequence[tuple[str, str]],
        default: str,
        intro: str = "",
    ) -> str:
        """Ask the user to pick one of several values.

        Args:
            question: Prompt text.
            choices: ``(label, value)`` pairs in display order.
            default: Value chosen when the user just presses enter.
            intro: Optional text shown before the choices.

        Returns:
            The chosen value.
        """
        ...

    @abstractmethod
    def confirm(self, question: str, default: bool = True) -> bool:
        """Ask a yes/no question."""
        ...
