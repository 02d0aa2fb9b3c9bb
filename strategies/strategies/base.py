"""Base strategy implementation with common functionality."""

from __future__ import annotations

import shutil
from abc import abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from core.errors import CommandError, TransferError
from core.interfaces import UpdateStrategy
from core.runner import CommandRunner

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from core.models import Settings

logger = structlog.get_logger(__name__)


class BaseStrategy(UpdateStrategy):
    """Base class for the built-in strategies.

    Provides:
    - Stamp file handling under ``<Basepath>/fink``
    - Command execution that reports failures as TransferError
    - Availability checking of the strategy's external tool
    """

    def __init__(self, settings: Settings, runner: CommandRunner | None = None) -> None:
        """Initialize the strategy.

        Args:
            settings: Configuration of the installation.
            runner: Command runner. Created from settings if not provided.
        """
        self.settings = settings
        self.runner = runner or CommandRunner(timeout=settings.command_timeout)
        self._log = logger.bind(method=self.name)

    @property
    @abstractmethod
    def command(self) -> str:
        """Return the external tool this strategy needs (e.g. 'rsync')."""
        ...

    @property
    def dists_dir(self) -> Path:
        return self.settings.dists_dir

    @property
    def stamp_path(self) -> Path:
        return self.settings.manager_root / f"stamp-{self.name}"

    def system_check(self) -> bool:
        """Check that the external tool is on PATH."""
        if shutil.which(self.command) is None:
            self._log.warning("command_not_found", command=self.command)
            return False
        return True

    @abstractmethod
    def transfer(self) -> None:
        """Bring the description tree up to date."""
        ...

    @abstractmethod
    def remove_metadata(self) -> None:
        """Remove this strategy's bookkeeping from the description tree."""
        ...

    def do_direct(self) -> None:
        with self._filesystem_errors("updating descriptions"):
            self.transfer()

    def clear_metadata(self) -> None:
        with self._filesystem_errors("clearing metadata"):
            self.remove_metadata()

    def stamp_set(self) -> None:
        with self._filesystem_errors("setting stamp"):
            self.stamp_path.parent.mkdir(parents=True, exist_ok=True)
            self.stamp_path.touch()
        self._log.debug("stamp_set", path=str(self.stamp_path))

    def stamp_clear(self) -> None:
        with self._filesystem_errors("clearing stamp"):
            self.stamp_path.unlink(missing_ok=True)

    @contextmanager
    def _filesystem_errors(self, action: str) -> Iterator[None]:
        """Report local filesystem failures as TransferError."""
        try:
            yield
        except OSError as e:
            self._log.error("filesystem_error", action=action, error=str(e))
            raise TransferError(self.name, f"{action}: {e}") from e

    def is_stamped(self) -> bool:
        """Return True if this strategy is currently the active one."""
        return self.stamp_path.exists()

    def _run(self, cmd: Sequence[str], *, cwd: Path | None = None, capture: bool = False) -> str:
        """Run a transfer command.

        Returns:
            Captured stdout ("" when not capturing).

        Raises:
            TransferError: If the command fails.
        """
        try:
            result = self.runner.run(cmd, cwd=cwd, capture=capture)
        except CommandError as e:
            raise TransferError(self.name, str(e)) from e
        return result.stdout or ""


def remove_path(path: Path) -> None:
    """Remove a file or a directory tree if it exists."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink(missing_ok=True)


def swap_tree(new_tree: Path, target: Path) -> None:
    """Replace ``target`` with ``new_tree``, carrying over ``target/local``.

    The ``local`` subtree holds the user's own descriptions and is never
    owned by a strategy.

    If the final rename fails, ``local`` and the old tree are put back
    before the error propagates.
    """
    old_tree = target.with_name(target.name + ".old")
    remove_path(old_tree)

    local_moved = False
    if target.exists():
        target.rename(old_tree)
        local = old_tree / "local"
        if local.exists() and not (new_tree / "local").exists():
            local.rename(new_tree / "local")
            local_moved = True

    try:
        new_tree.rename(target)
    except OSError:
        if local_moved:
            (new_tree / "local").rename(old_tree / "local")
        if old_tree.exists() and not target.exists():
            old_tree.rename(target)
        raise
    remove_path(old_tree)
