"""Entry point tying method selection to the update cycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from .finalizer import Finalizer
from .orchestrator import UpdateOrchestrator
from .selector import MethodSelector

if TYPE_CHECKING:
    from .context import SelfUpdateContext

logger = structlog.get_logger(__name__)


class SelfUpdater:
    """Runs ``selfupdate`` and ``selfupdate-finish``."""

    def __init__(self, context: SelfUpdateContext) -> None:
        self.context = context
        self.selector = MethodSelector(context)
        self.finalizer = Finalizer(context)
        self.orchestrator = UpdateOrchestrator(context, finalizer=self.finalizer)

    def check(self, requested: str | int | None = None) -> bool:
        """Update the description collection with the resolved method.

        Args:
            requested: Optional method token (name or legacy code 0/1/2).

        Returns:
            False if the user declined to change the method, True once the
            run has completed.
        """
        selection = self.selector.select(requested)
        if selection is None:
            return False

        logger.info("selfupdate_started", method=selection.method, changed=selection.changed)
        self.orchestrator.run(selection)
        return True

    def finish(self) -> None:
        """Run the second finalization phase on its own."""
        self.context.database.reload_all()
        self.finalizer.finish()
