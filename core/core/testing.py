"""In-memory collaborators for tests and dry runs.

Each double records the calls made to it so a test can assert on the
exact sequence of operations a self-update run performed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .config import ConfigManager
from .context import SelfUpdateContext
from .errors import InstallError, TransferError
from .interfaces import (
    Installer,
    Package,
    PackageDatabase,
    ProcessControl,
    UpdateStrategy,
    UserInterface,
)
from .models import Settings
from .registry import StrategyRegistry

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class FakeStrategy(UpdateStrategy):
    """Strategy that records calls into a shared event log."""

    def __init__(
        self,
        name: str,
        events: list[str] | None = None,
        *,
        usable: bool = True,
        fail_transfer: bool = False,
        stamped: bool = False,
        has_metadata: bool = False,
    ) -> None:
        self._name = name
        self.events = events if events is not None else []
        self.usable = usable
        self.fail_transfer = fail_transfer
        self.stamped = stamped
        self.has_metadata = has_metadata

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return f"{self._name} (fake)"

    def system_check(self) -> bool:
        self.events.append(f"{self._name}.system_check")
        return self.usable

    def do_direct(self) -> None:
        self.events.append(f"{self._name}.do_direct")
        if self.fail_transfer:
            raise TransferError(self._name, "simulated transfer failure")
        self.has_metadata = True

    def stamp_set(self) -> None:
        self.events.append(f"{self._name}.stamp_set")
        self.stamped = True

    def stamp_clear(self) -> None:
        self.events.append(f"{self._name}.stamp_clear")
        self.stamped = False

    def clear_metadata(self) -> None:
        self.events.append(f"{self._name}.clear_metadata")
        self.has_metadata = False


@dataclass
class FakePackage(Package):
    name: str
    current: bool = True
    any_installed: bool = True

    def is_installed(self) -> bool:
        return self.current

    def is_any_installed(self) -> bool:
        return self.any_installed


class FakePackageDatabase(PackageDatabase):
    """Package database holding a fixed set of packages."""

    def __init__(
        self,
        packages: Sequence[FakePackage] = (),
        essential: Sequence[str] = (),
        events: list[str] | None = None,
    ) -> None:
        self.packages = {p.name: p for p in packages}
        self.essential = list(essential)
        self.events = events if events is not None else []
        self.loaded = False

    def forget_all(self) -> None:
        self.events.append("db.forget_all")
        self.loaded = False

    def reload_all(self) -> None:
        self.events.append("db.reload_all")
        self.loaded = True

    def lookup(self, name: str) -> FakePackage | None:
        return self.packages.get(name)

    def list_essential(self) -> list[str]:
        return list(self.essential)


class RecordingInstaller(Installer):
    """Installer that records batches instead of installing."""

    def __init__(
        self,
        events: list[str] | None = None,
        *,
        refresh_ok: bool = True,
        fail_install: bool = False,
    ) -> None:
        self.events = events if events is not None else []
        self.refresh_ok = refresh_ok
        self.fail_install = fail_install
        self.installed: list[list[str]] = []

    def install(self, names: Sequence[str]) -> None:
        batch = list(names)
        self.events.append("install " + " ".join(batch))
        if self.fail_install:
            raise InstallError(batch, "simulated install failure")
        self.installed.append(batch)

    def refresh_index(self) -> bool:
        self.events.append("refresh_index")
        return self.refresh_ok


class RecordingProcessControl(ProcessControl):
    """Records the intended process replacement instead of performing it."""

    def __init__(self, events: list[str] | None = None) -> None:
        self.events = events if events is not None else []
        self.replacements: list[tuple[str, list[str]]] = []

    def replace(self, executable: str, args: Sequence[str]) -> OSError | None:
        self.events.append("replace " + " ".join(args))
        self.replacements.append((executable, list(args)))
        return OSError("process replacement recorded, not performed")


@dataclass
class ScriptedUserInterface(UserInterface):
    """User interface answering prompts from preset values."""

    selection: str | None = None
    confirmation: bool = True
    notices: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    selects: list[str] = field(default_factory=list)
    confirms: list[str] = field(default_factory=list)

    def notice(self, text: str) -> None:
        self.notices.append(text)

    def warning(self, text: str) -> None:
        self.warnings.append(text)

    def select(
        self,
        question: str,
        choices: Sequence[tuple[str, str]],
        default: str,
        intro: str = "",
    ) -> str:
        self.selects.append(question)
        return self.selection if self.selection is not None else default

    def confirm(self, question: str, default: bool = True) -> bool:
        self.confirms.append(question)
        return self.confirmation


class RecordingConfigManager(ConfigManager):
    """Config manager counting saves; writes only when given a path."""

    def __init__(self, params: dict[str, str] | None = None, path: Path | None = None) -> None:
        super().__init__(config_path=path)
        self._params = dict(params or {})
        self._persist = path is not None
        self.saves = 0

    def save(self) -> None:
        self.saves += 1
        if self._persist:
            super().save()


def make_context(
    *,
    strategies: Sequence[UpdateStrategy] = (),
    params: dict[str, str] | None = None,
    database: PackageDatabase | None = None,
    installer: Installer | None = None,
    process: ProcessControl | None = None,
    ui: UserInterface | None = None,
    settings: Settings | None = None,
) -> SelfUpdateContext:
    """Build a context from doubles, filling in defaults for anything omitted."""
    registry = StrategyRegistry()
    for strategy in strategies:
        registry.register(strategy)

    config = RecordingConfigManager(params)
    return SelfUpdateContext(
        config=config,
        settings=settings or config.get_settings(),
        registry=registry,
        database=database or FakePackageDatabase(),
        installer=installer or RecordingInstaller(),
        process=process or RecordingProcessControl(),
        ui=ui or ScriptedUserInterface(),
    )
