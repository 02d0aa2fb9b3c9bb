"""Core data models for the self-update workflow.

This module defines the update method identifiers, the method selection
result and the Pydantic view of the configuration file.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path  # noqa: TC003 - needed at runtime by Pydantic
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Config key holding the persisted update method.
SELF_UPDATE_METHOD_KEY = "SelfUpdateMethod"


class UpdateMethod(str, Enum):
    """Built-in update method identifiers."""

    RSYNC = "rsync"
    CVS = "cvs"
    POINT = "point"


#: Numeric method codes accepted by older callers ("" means unset).
LEGACY_METHOD_CODES: dict[str, str] = {
    "0": "",
    "1": UpdateMethod.CVS.value,
    "2": UpdateMethod.RSYNC.value,
}


class LogLevel(str, Enum):
    """Log level for structlog output."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class MethodSelection:
    """Outcome of method resolution for one run."""

    method: str
    previous: str = ""

    @property
    def changed(self) -> bool:
        """Whether the method differs from the persisted preference."""
        return self.method != self.previous


class Settings(BaseModel):
    """Typed view of the configuration file.

    Keys use the CamelCase spelling of the file; fields may also be
    populated by their Python names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    basepath: Path = Field(default=Path("/sw"), alias="Basepath")
    self_update_method: str = Field(default="", alias=SELF_UPDATE_METHOD_KEY)
    log_level: LogLevel = Field(default=LogLevel.WARNING, alias="LogLevel")

    manager_package: str = Field(
        default="fink",
        alias="ManagerPackage",
        description="Package name of the package manager itself",
    )
    manager_executable: Path | None = Field(
        default=None,
        alias="ManagerExecutable",
        description="Binary re-executed after a self-upgrade. None = <Basepath>/bin/fink",
    )
    important_packages: list[str] = Field(
        default_factory=lambda: ["apt", "apt-shlibs", "dpkg", "base-files"],
        alias="ImportantPackages",
        description="Packages kept current alongside the essential ones, when installed",
    )
    interpreter_package: str = Field(
        default="python{major}.{minor}",
        alias="InterpreterPackage",
        description="Template naming the package of the running interpreter",
    )

    install_command: list[str] = Field(
        default_factory=lambda: ["apt-get", "--yes", "install"],
        alias="InstallCommand",
    )
    index_update_command: list[str] = Field(
        default_factory=lambda: ["apt-get", "update"],
        alias="IndexUpdateCommand",
    )
    command_timeout: int = Field(default=3600, alias="CommandTimeout")

    rsync_mirror: str = Field(
        default="rsync://distfiles.master.finkmirrors.net/finkinfo/",
        alias="Mirror-rsync",
    )
    distribution: str = Field(default="current", alias="Distribution")
    cvs_root: str = Field(
        default=":pserver:anonymous@fink.cvs.sourceforge.net:/cvsroot/fink",
        alias="CVSRoot",
    )
    cvs_module: str = Field(default="dists", alias="CVSModule")
    point_url: str = Field(
        default="https://downloads.finkproject.org/dists",
        alias="PointURL",
    )

    @field_validator("install_command", "index_update_command", mode="before")
    @classmethod
    def split_command(cls, value: Any) -> Any:
        if isinstance(value, str):
            return shlex.split(value)
        return value

    @field_validator("self_update_method", mode="before")
    @classmethod
    def lower_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lower()
        return value

    @property
    def manager_root(self) -> Path:
        """Directory holding the description tree and stamps."""
        return self.basepath / "fink"

    @property
    def dists_dir(self) -> Path:
        """Local package-description collection."""
        return self.manager_root / "dists"

    @property
    def executable(self) -> Path:
        """Path of the package manager binary."""
        return self.manager_executable or self.basepath / "bin" / "fink"
