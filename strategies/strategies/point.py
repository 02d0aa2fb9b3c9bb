"""Point-release update strategy.

Downloads the description tarball of the latest point release with
``curl`` and unpacks it over the description tree. The release version is
recorded in ``dists/VERSION``.
"""

from __future__ import annotations

import tarfile
from typing import TYPE_CHECKING

from core.errors import TransferError
from core.models import UpdateMethod

from .base import BaseStrategy, remove_path, swap_tree

if TYPE_CHECKING:
    from pathlib import Path


class PointStrategy(BaseStrategy):
    """Stick to point releases."""

    @property
    def name(self) -> str:
        return UpdateMethod.POINT.value

    @property
    def description(self) -> str:
        return "Stick to point releases"

    @property
    def command(self) -> str:
        return "curl"

    @property
    def version_file(self) -> Path:
        return self.dists_dir / "VERSION"

    def latest_version(self) -> str:
        """Ask the server for the latest point release."""
        url = f"{self.settings.point_url.rstrip('/')}/LATEST"
        version = self._run(["curl", "-fsSL", url], capture=True).strip()
        if not version:
            raise TransferError(self.name, f"no release version published at {url}")
        return version

    def transfer(self) -> None:
        version = self.latest_version()
        if self.version_file.exists() and self.version_file.read_text().strip() == version:
            self._log.info("point_release_current", version=version)
            return

        root = self.settings.manager_root
        root.mkdir(parents=True, exist_ok=True)
        archive = root / f"dists-{version}.tar.gz"
        unpacked = root / "dists.point"
        url = f"{self.settings.point_url.rstrip('/')}/dists-{version}.tar.gz"

        self._log.info("point_download_started", version=version, url=url)
        try:
            self._run(["curl", "-fL", "-o", str(archive), url])

            remove_path(unpacked)
            unpacked.mkdir()
            try:
                with tarfile.open(archive, "r:gz") as tar:
                    tar.extractall(unpacked, filter="data")
            except (OSError, tarfile.TarError) as e:
                raise TransferError(self.name, f"cannot unpack {archive.name}: {e}") from e

            (unpacked / "VERSION").write_text(f"{version}\n")
            swap_tree(unpacked, self.dists_dir)
        finally:
            remove_path(archive)
            remove_path(unpacked)

    def remove_metadata(self) -> None:
        remove_path(self.version_file)
