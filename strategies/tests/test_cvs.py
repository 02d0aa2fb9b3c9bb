"""Tests for the CVS strategy."""

from __future__ import annotations

from unittest.mock import MagicMock

from core.models import Settings
from strategies.cvs import CvsStrategy


class TestCvsStrategy:
    """Tests for CvsStrategy."""

    def test_update_existing_checkout(self, settings: Settings, runner: MagicMock) -> None:
        (settings.dists_dir / "CVS").mkdir(parents=True)
        strategy = CvsStrategy(settings, runner)

        strategy.do_direct()

        runner.run.assert_called_once_with(
            ["cvs", "-z3", "-q", "update", "-dP"],
            cwd=settings.dists_dir,
            capture=False,
        )

    def test_first_checkout_swapped_in(self, settings: Settings, runner: MagicMock) -> None:
        """Test a fresh checkout replaces the tree and keeps local descriptions."""
        (settings.dists_dir / "local").mkdir(parents=True)
        (settings.dists_dir / "local" / "mine.info").write_text("mine")
        checkout = settings.manager_root / "dists.cvs"

        def fake_checkout(cmd, **kwargs):
            (checkout / "CVS").mkdir(parents=True)
            (checkout / "fink.info").write_text("Package: fink")
            return runner.run.return_value

        runner.run.side_effect = fake_checkout
        strategy = CvsStrategy(settings, runner)

        strategy.do_direct()

        cmd = runner.run.call_args.args[0]
        assert cmd[:5] == ["cvs", "-z3", "-q", "-d", settings.cvs_root]
        assert cmd[-4:] == ["-P", "-d", "dists.cvs", "dists"]
        assert runner.run.call_args.kwargs["cwd"] == settings.manager_root
        assert strategy.is_checkout()
        assert (settings.dists_dir / "fink.info").exists()
        assert (settings.dists_dir / "local" / "mine.info").read_text() == "mine"
        assert not checkout.exists()

    def test_clear_metadata_removes_cvs_dirs(self, settings: Settings, runner: MagicMock) -> None:
        (settings.dists_dir / "CVS").mkdir(parents=True)
        (settings.dists_dir / "main" / "CVS").mkdir(parents=True)
        (settings.dists_dir / "main" / "fink.info").write_text("Package: fink")
        strategy = CvsStrategy(settings, runner)

        strategy.clear_metadata()

        assert not strategy.is_checkout()
        assert not (settings.dists_dir / "main" / "CVS").exists()
        assert (settings.dists_dir / "main" / "fink.info").exists()

    def test_clear_metadata_keeps_local_checkouts(
        self, settings: Settings, runner: MagicMock
    ) -> None:
        """Test the user's own working copies under local/ are left alone."""
        (settings.dists_dir / "CVS").mkdir(parents=True)
        (settings.dists_dir / "local" / "main" / "CVS").mkdir(parents=True)
        strategy = CvsStrategy(settings, runner)

        strategy.clear_metadata()

        assert not strategy.is_checkout()
        assert (settings.dists_dir / "local" / "main" / "CVS").is_dir()

    def test_clear_metadata_without_tree(self, settings: Settings, runner: MagicMock) -> None:
        CvsStrategy(settings, runner).clear_metadata()
