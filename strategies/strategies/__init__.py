"""fink-selfupdate strategies package.

This package contains the built-in strategies for refreshing the
package-description collection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.registry import StrategyRegistry
from strategies.base import BaseStrategy
from strategies.cvs import CvsStrategy
from strategies.point import PointStrategy
from strategies.rsync import RsyncStrategy

if TYPE_CHECKING:
    from core.models import Settings
    from core.runner import CommandRunner

__all__ = [
    "BaseStrategy",
    "CvsStrategy",
    "PointStrategy",
    "RsyncStrategy",
    "register_builtin_strategies",
]


def register_builtin_strategies(
    settings: Settings,
    registry: StrategyRegistry | None = None,
    runner: CommandRunner | None = None,
) -> StrategyRegistry:
    """Register all built-in strategies with the registry.

    Strategies are offered to the user in registration order: rsync, cvs,
    point.

    Args:
        settings: Configuration passed to every strategy.
        registry: Optional registry to use. A new one is created if not provided.
        runner: Optional command runner shared by the strategies.

    Returns:
        The registry with built-in strategies registered.
    """
    if registry is None:
        registry = StrategyRegistry()

    registry.register(RsyncStrategy(settings, runner))
    registry.register(CvsStrategy(settings, runner))
    registry.register(PointStrategy(settings, runner))

    return registry
