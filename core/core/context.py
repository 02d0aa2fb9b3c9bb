"""Explicit handle passed to every self-update component."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import ConfigManager
    from .interfaces import Installer, PackageDatabase, ProcessControl, UserInterface
    from .models import Settings
    from .registry import StrategyRegistry


@dataclass
class SelfUpdateContext:
    """Configuration and collaborators for one self-update run."""

    config: ConfigManager
    settings: Settings
    registry: StrategyRegistry
    database: PackageDatabase
    installer: Installer
    process: ProcessControl
    ui: UserInterface
