"""Static registry of update strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .interfaces import UpdateStrategy

logger = structlog.get_logger(__name__)


class StrategyRegistry:
    """Ordered mapping from method identifier to strategy.

    Strategies are registered explicitly at startup; registration order is
    the order in which they are offered to the user.
    """

    def __init__(self) -> None:
        """Initialize an empty strategy registry."""
        self._strategies: dict[str, UpdateStrategy] = {}

    def register(self, strategy: UpdateStrategy) -> None:
        """Register a strategy under its (lower-cased) name.

        Raises:
            ValueError: If a strategy with the same name is already registered.
        """
        name = strategy.name.lower()
        if name in self._strategies:
            raise ValueError(f"Update method '{name}' is already registered")
        self._strategies[name] = strategy
        logger.debug("strategy_registered", method=name)

    def get(self, name: str) -> UpdateStrategy | None:
        """Get a strategy by method name.

        Returns:
            The strategy, or None if not registered.
        """
        return self._strategies.get(name.lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._strategies

    def list_names(self) -> list[str]:
        """List all registered method names in registration order."""
        return list(self._strategies.keys())

    def get_all(self) -> list[UpdateStrategy]:
        """Get all registered strategies in registration order."""
        return list(self._strategies.values())

    def others(self, name: str) -> list[UpdateStrategy]:
        """Get every registered strategy except ``name``."""
        selected = name.lower()
        return [s for key, s in self._strategies.items() if key != selected]

    def choices(self) -> list[tuple[str, str]]:
        """Return ``(description, name)`` pairs for a selection prompt."""
        return [(s.description, key) for key, s in self._strategies.items()]
