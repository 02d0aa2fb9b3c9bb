"""rsync update strategy.

Mirrors the description tree of the configured distribution from an rsync
server. Mirrors publish a ``TIMESTAMP`` file at the top of the tree, which
this strategy treats as its metadata.
"""

from __future__ import annotations

from core.models import UpdateMethod

from .base import BaseStrategy, remove_path


class RsyncStrategy(BaseStrategy):
    """Synchronize descriptions with ``rsync``."""

    @property
    def name(self) -> str:
        return UpdateMethod.RSYNC.value

    @property
    def description(self) -> str:
        return "rsync"

    @property
    def command(self) -> str:
        return "rsync"

    @property
    def source(self) -> str:
        """rsync URL of the distribution's description tree."""
        mirror = self.settings.rsync_mirror.rstrip("/")
        return f"{mirror}/{self.settings.distribution}/"

    def get_sync_command(self) -> list[str]:
        return [
            "rsync",
            "-rtz",
            "--delete-after",
            "--exclude=/local/",
            self.source,
            f"{self.dists_dir}/",
        ]

    def transfer(self) -> None:
        self.dists_dir.mkdir(parents=True, exist_ok=True)
        self._log.info("rsync_started", source=self.source)
        self._run(self.get_sync_command())

    def remove_metadata(self) -> None:
        remove_path(self.dists_dir / "TIMESTAMP")
