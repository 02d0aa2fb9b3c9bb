"""Orchestrator for one self-update cycle.

This module drives the selected strategy: it checks the strategy is
usable, records it as the default method, clears the state of every other
strategy, runs the transfer and hands over to the finalizer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from .errors import StrategyUnavailableError, UnknownMethodError
from .finalizer import Finalizer
from .models import SELF_UPDATE_METHOD_KEY

if TYPE_CHECKING:
    from .context import SelfUpdateContext
    from .models import MethodSelection

logger = structlog.get_logger(__name__)


class UpdateOrchestrator:
    """Orchestrates a single self-update run.

    Each step is a precondition for the next one; any exception stops the
    run where it is raised.
    """

    def __init__(
        self,
        context: SelfUpdateContext,
        finalizer: Finalizer | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            context: Configuration and collaborators for the run.
            finalizer: Post-transfer finalizer. Built from the context if not provided.
        """
        self._ctx = context
        self.finalizer = finalizer or Finalizer(context)
        self._log = logger.bind(component="orchestrator")

    def run(self, selection: MethodSelection) -> None:
        """Run one update cycle with the resolved method.

        Args:
            selection: Result of method resolution.

        Raises:
            UnknownMethodError: If the method is not registered.
            StrategyUnavailableError: If the strategy cannot be used here.
        """
        method = selection.method
        strategy = self._ctx.registry.get(method)
        if strategy is None:
            raise UnknownMethodError(method)

        log = self._log.bind(method=method)

        if not strategy.system_check():
            log.error("system_check_failed")
            raise StrategyUnavailableError(method)

        if selection.changed:
            # save new selection (explicit change or being set for first time)
            self._ctx.ui.notice(f"fink is setting your default update method to {method}")
            self._ctx.config.set_param(SELF_UPDATE_METHOD_KEY, method)
            self._ctx.config.save()
            log.info("default_method_saved", previous=selection.previous or None)

        for other in self._ctx.registry.others(method):
            other.stamp_clear()
            other.clear_metadata()
            log.debug("strategy_state_cleared", cleared=other.name)

        log.info("transfer_started")
        strategy.do_direct()
        strategy.stamp_set()
        log.info("transfer_completed")

        self.finalizer.do_finish()
