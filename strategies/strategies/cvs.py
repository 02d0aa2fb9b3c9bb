"""CVS update strategy.

Keeps the description tree as a CVS working copy. The first run checks
the module out next to the tree and swaps it in; later runs update in
place. The ``CVS`` bookkeeping directories are this strategy's metadata.
"""

from __future__ import annotations

from core.models import UpdateMethod

from .base import BaseStrategy, remove_path, swap_tree


class CvsStrategy(BaseStrategy):
    """Synchronize descriptions with ``cvs``."""

    @property
    def name(self) -> str:
        return UpdateMethod.CVS.value

    @property
    def description(self) -> str:
        return "cvs"

    @property
    def command(self) -> str:
        return "cvs"

    def is_checkout(self) -> bool:
        """Return True if the description tree is a CVS working copy."""
        return (self.dists_dir / "CVS").is_dir()

    def transfer(self) -> None:
        if self.is_checkout():
            self._log.info("cvs_update_started")
            self._run(["cvs", "-z3", "-q", "update", "-dP"], cwd=self.dists_dir)
            return

        checkout = self.dists_dir.with_name(self.dists_dir.name + ".cvs")
        remove_path(checkout)
        self.dists_dir.parent.mkdir(parents=True, exist_ok=True)

        self._log.info("cvs_checkout_started", root=self.settings.cvs_root)
        self._run(
            [
                "cvs",
                "-z3",
                "-q",
                "-d",
                self.settings.cvs_root,
                "checkout",
                "-P",
                "-d",
                checkout.name,
                self.settings.cvs_module,
            ],
            cwd=self.dists_dir.parent,
        )
        swap_tree(checkout, self.dists_dir)

    def remove_metadata(self) -> None:
        if not self.dists_dir.exists():
            return
        local = self.dists_dir / "local"
        for cvs_dir in sorted(self.dists_dir.rglob("CVS"), reverse=True):
            # dists/local belongs to the user
            if cvs_dir.is_dir() and not cvs_dir.is_relative_to(local):
                remove_path(cvs_dir)
