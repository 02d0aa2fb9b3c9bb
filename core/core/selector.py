"""Resolution of the update method for one self-update run.

The method comes from one of three places, in order of precedence: an
explicit request on the command line, the preference saved in the
configuration file, or an interactive choice. Explicitly switching away
from the saved preference must be confirmed by the user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from .errors import UnknownMethodError
from .models import LEGACY_METHOD_CODES, SELF_UPDATE_METHOD_KEY, MethodSelection, UpdateMethod

if TYPE_CHECKING:
    from .context import SelfUpdateContext

logger = structlog.get_logger(__name__)

DEFAULT_METHOD = UpdateMethod.RSYNC.value

ROUTINE_USE_NOTICE = (
    "Please note: the command 'fink selfupdate' should be used for routine "
    "updating; you only need to use a command like 'fink selfupdate-cvs' or "
    "'fink selfupdate-rsync' if you are changing your update method."
)


def normalize_method(requested: str | int | None) -> str:
    """Canonicalize a requested method token.

    Args:
        requested: None, a legacy numeric code (0, 1, 2) or a method name.

    Returns:
        The lower-case method name, or "" when no method was requested.
    """
    if requested is None:
        return ""
    token = str(requested).strip()
    if token in LEGACY_METHOD_CODES:
        return LEGACY_METHOD_CODES[token]
    return token.lower()


class MethodSelector:
    """Decides which registered strategy a run uses."""

    def __init__(self, context: SelfUpdateContext) -> None:
        self._ctx = context
        self._log = logger.bind(component="selector")

    def previous_method(self) -> str:
        """Return the persisted preference, lower case ("" if unset)."""
        return self._ctx.config.param_default(SELF_UPDATE_METHOD_KEY, "").lower()

    def select(self, requested: str | int | None = None) -> MethodSelection | None:
        """Resolve the method for this run.

        Args:
            requested: Optional method token from the caller.

        Returns:
            The selection, or None if the user declined to change the
            saved method.

        Raises:
            UnknownMethodError: If the resolved method is not registered.
        """
        method = normalize_method(requested)
        previous = self.previous_method()
        ui = self._ctx.ui

        if not method:
            if previous:
                method = previous
                self._log.debug("using_saved_method", method=method)
            else:
                method = ui.select(
                    "Choose an update method",
                    choices=self._ctx.registry.choices(),
                    default=DEFAULT_METHOD,
                    intro="fink needs you to choose a SelfUpdateMethod.",
                ).lower()
                self._log.info("method_chosen", method=method)
        else:
            ui.notice(ROUTINE_USE_NOTICE)

            if previous and method != previous:
                answer = ui.confirm(
                    f"The current selfupdate method is {previous}. "
                    f"Do you wish to change this default method to {method}?",
                    default=True,
                )
                if not answer:
                    self._log.info("method_change_declined", method=method, previous=previous)
                    return None

        if method not in self._ctx.registry:
            raise UnknownMethodError(method)

        return MethodSelection(method=method, previous=previous)
