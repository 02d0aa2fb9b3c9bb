"""fink-selfupdate core library.

Self-update workflow of the package manager: method selection, the update
cycle and post-transfer finalization, plus reference implementations of
the collaborators they drive.

Module Overview:
    config: YAML-based preference store (XDG spec compliant)
    context: Explicit handle bundling settings and collaborators
    errors: Exception hierarchy rooted at SelfUpdateError
    finalizer: Index refresh, self-upgrade with re-exec, essential packages
    installer: apt-get based installer
    interfaces: Abstract base classes for strategies and collaborators
    models: Update methods, method selection and Pydantic settings
    orchestrator: One update cycle with the selected strategy
    packages: dpkg/apt backed package database
    process: Process replacement via os.execv
    registry: Static strategy registry
    runner: Blocking external command execution
    selector: Update method resolution
    selfupdate: Entry point combining selector and orchestrator
    testing: Recording doubles of every collaborator
"""

from importlib.metadata import version as get_package_version

from core.config import ConfigManager, YamlConfigLoader, get_config_dir, get_default_config_path
from core.context import SelfUpdateContext
from core.errors import (
    CommandError,
    ConfigError,
    InstallError,
    ReexecError,
    SelfUpdateError,
    StrategyUnavailableError,
    TransferError,
    UnknownMethodError,
)
from core.finalizer import Finalizer
from core.installer import AptInstaller
from core.interfaces import (
    Installer,
    Package,
    PackageDatabase,
    ProcessControl,
    UpdateStrategy,
    UserInterface,
)
from core.models import (
    LEGACY_METHOD_CODES,
    SELF_UPDATE_METHOD_KEY,
    LogLevel,
    MethodSelection,
    Settings,
    UpdateMethod,
)
from core.orchestrator import UpdateOrchestrator
from core.packages import AptPackage, AptPackageDatabase
from core.process import ExecProcessControl
from core.registry import StrategyRegistry
from core.runner import CommandRunner
from core.selector import MethodSelector, normalize_method
from core.selfupdate import SelfUpdater

__version__ = get_package_version("fink-selfupdate")

__all__ = [
    "LEGACY_METHOD_CODES",
    "SELF_UPDATE_METHOD_KEY",
    "AptInstaller",
    "AptPackage",
    "AptPackageDatabase",
    "CommandError",
    "CommandRunner",
    "ConfigError",
    "ConfigManager",
    "ExecProcessControl",
    "Finalizer",
    "InstallError",
    "Installer",
    "LogLevel",
    "MethodSelection",
    "MethodSelector",
    "Package",
    "PackageDatabase",
    "ProcessControl",
    "ReexecError",
    "SelfUpdateContext",
    "SelfUpdateError",
    "SelfUpdater",
    "Settings",
    "StrategyRegistry",
    "StrategyUnavailableError",
    "TransferError",
    "UnknownMethodError",
    "UpdateMethod",
    "UpdateOrchestrator",
    "UpdateStrategy",
    "UserInterface",
    "YamlConfigLoader",
    "get_config_dir",
    "get_default_config_path",
    "normalize_method",
]
