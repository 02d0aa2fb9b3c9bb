"""Package database backed by dpkg and apt.

Installed state and the Essential flag come from ``dpkg-query``; the
version apt would install comes from ``apt-cache policy``. Both tools read
the descriptions themselves, this module only reads their output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from .interfaces import Package, PackageDatabase

if TYPE_CHECKING:
    from .runner import CommandRunner

logger = structlog.get_logger(__name__)

DPKG_QUERY_FORMAT = "${Package}\\t${Version}\\t${db:Status-Abbrev}\\t${Essential}\\n"

POLICY_INSTALLED_PATTERN = re.compile(r"^\s*Installed:\s*(\S+)", re.MULTILINE)
POLICY_CANDIDATE_PATTERN = re.compile(r"^\s*Candidate:\s*(\S+)", re.MULTILINE)

NO_VERSION = "(none)"


@dataclass
class AptPackage(Package):
    """Installed and candidate versions of one package."""

    name: str
    installed_version: str | None = None
    candidate_version: str | None = None

    def is_installed(self) -> bool:
        if self.installed_version is None:
            return False
        return self.candidate_version is None or self.installed_version == self.candidate_version

    def is_any_installed(self) -> bool:
        return self.installed_version is not None


def parse_dpkg_query(output: str) -> tuple[dict[str, str], list[str]]:
    """Parse ``dpkg-query -W`` output in :data:`DPKG_QUERY_FORMAT`.

    Returns:
        Installed versions by package name, and the names of installed
        packages flagged Essential.
    """
    installed: dict[str, str] = {}
    essential: list[str] = []

    for line in output.splitlines():
        fields = line.split("\t")
        if len(fields) < 4:
            continue
        name, version, status, essential_flag = fields[:4]
        # "ii" installed, "hi" installed and held
        if len(status) < 2 or status[1] != "i":
            continue
        installed[name] = version
        if essential_flag.strip().lower() == "yes":
            essential.append(name)

    return installed, essential


def parse_policy(output: str) -> tuple[str | None, str | None] | None:
    """Parse ``apt-cache policy <name>`` output.

    Returns:
        ``(installed, candidate)`` versions, either of which may be None,
        or None when apt does not know the package.
    """
    candidate_match = POLICY_CANDIDATE_PATTERN.search(output)
    if candidate_match is None:
        return None

    installed_match = POLICY_INSTALLED_PATTERN.search(output)
    installed = installed_match.group(1) if installed_match else None
    candidate = candidate_match.group(1)

    return (
        None if installed == NO_VERSION else installed,
        None if candidate == NO_VERSION else candidate,
    )


class AptPackageDatabase(PackageDatabase):
    """Package database reading dpkg status and apt candidates.

    Metadata is loaded wholesale by :meth:`reload_all`; candidate versions
    are queried per package on first lookup and cached until
    :meth:`forget_all`.
    """

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner
        self._installed: dict[str, str] | None = None
        self._essential: list[str] = []
        self._packages: dict[str, AptPackage | None] = {}

    def forget_all(self) -> None:
        self._installed = None
        self._essential = []
        self._packages.clear()
        logger.debug("package_cache_cleared")

    def reload_all(self) -> None:
        self._load()

    def _load(self) -> dict[str, str]:
        self._packages.clear()
        result = self.runner.run(
            ["dpkg-query", "-W", f"-f={DPKG_QUERY_FORMAT}"],
            capture=True,
        )
        self._installed, self._essential = parse_dpkg_query(result.stdout)
        logger.info(
            "packages_loaded",
            installed=len(self._installed),
            essential=len(self._essential),
        )
        return self._installed

    def _require_packages(self) -> dict[str, str]:
        if self._installed is None:
            return self._load()
        return self._installed

    def lookup(self, name: str) -> AptPackage | None:
        if name in self._packages:
            return self._packages[name]

        installed = self._require_packages()
        result = self.runner.run(["apt-cache", "policy", name], capture=True, check=False)
        parsed = parse_policy(result.stdout) if result.returncode == 0 else None

        package: AptPackage | None
        if parsed is None:
            # apt does not know it; dpkg may still have it installed
            version = installed.get(name)
            package = AptPackage(name, installed_version=version) if version else None
        else:
            installed_version, candidate_version = parsed
            if installed_version is None and candidate_version is None:
                package = None
            else:
                package = AptPackage(name, installed_version, candidate_version)

        self._packages[name] = package
        return package

    def list_essential(self) -> list[str]:
        self._require_packages()
        return list(self._essential)
