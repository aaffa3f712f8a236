"""
Platform facts used to pick a persistence strategy.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import platform
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Mapping

from fwutil.errors import ExecutionFailure
from fwutil.models import enum_value
from fwutil.persist.execute import Executor, run_command
from fwutil.persist.version import versioncmp

logger = logging.getLogger(__name__)


class Fact(str, Enum):
    """Names of the facts a provider can supply."""

    OS_FAMILY = "os_family"
    OS_NAME = "os_name"
    OS_RELEASE = "os_release"
    PERSISTENCE_PACKAGE_VERSION = "persistence_package_version"


# os-release ID -> distribution name
OS_NAMES = {
    "rhel": "RedHat",
    "centos": "CentOS",
    "fedora": "Fedora",
    "scientific": "Scientific",
    "cloudlinux": "CloudLinux",
    "ol": "OracleLinux",
    "amzn": "Amazon",
    "xenenterprise": "XenServer",
    "virtuozzo": "VirtuozzoLinux",
    "rocky": "Rocky",
    "almalinux": "AlmaLinux",
    "debian": "Debian",
    "ubuntu": "Ubuntu",
    "linuxmint": "LinuxMint",
    "raspbian": "Raspbian",
    "arch": "Archlinux",
    "manjaro": "ManjaroLinux",
    "sles": "SLES",
    "sled": "SLED",
    "opensuse": "OpenSuSE",
    "opensuse-leap": "OpenSuSE",
    "opensuse-tumbleweed": "OpenSuSE",
}

OS_FAMILIES = {
    "RedHat": "RedHat",
    "CentOS": "RedHat",
    "Fedora": "RedHat",
    "Scientific": "RedHat",
    "CloudLinux": "RedHat",
    "OracleLinux": "RedHat",
    "Amazon": "RedHat",
    "XenServer": "RedHat",
    "VirtuozzoLinux": "RedHat",
    "Rocky": "RedHat",
    "AlmaLinux": "RedHat",
    "Debian": "Debian",
    "Ubuntu": "Debian",
    "LinuxMint": "Debian",
    "Raspbian": "Debian",
    "Archlinux": "Archlinux",
    "ManjaroLinux": "Archlinux",
    "SLES": "Suse",
    "SLED": "Suse",
    "OpenSuSE": "Suse",
}

_HAS_VERSION = re.compile(r"\d+\.\d+")


class FactProvider(ABC):
    """Source of platform facts."""

    @abstractmethod
    def value(self, name: Fact | str) -> str | None:
        """Return the fact value, or None if it is not known."""
        pass

    def flush(self, name: Fact | str) -> None:
        """Drop any cached value so the next read is fresh."""
        pass


class StaticFacts(FactProvider):
    """Fixed fact snapshot.

    Usage:
        facts = StaticFacts(os_family="Debian", persistence_package_version="1.0.4")
    """

    def __init__(self, facts: Mapping[str, str | None] | None = None, **kwargs: str | None):
        merged = dict(facts or {})
        merged.update(kwargs)
        self._facts = {enum_value(k): v for k, v in merged.items()}

    def value(self, name: Fact | str) -> str | None:
        return self._facts.get(enum_value(name))

    def __repr__(self) -> str:
        return f"StaticFacts({self._facts!r})"


class SystemFacts(FactProvider):
    """Facts collected from the running host.

    Distribution facts come from os-release. The persistence package version
    is read with dpkg-query on Debian and Ubuntu and is None elsewhere, or
    when the package is not installed.
    """

    def __init__(self, executor: Executor = run_command):
        self.executor = executor
        self._cache: dict[str, str | None] = {}

    def value(self, name: Fact | str) -> str | None:
        key = enum_value(name)
        if key not in self._cache:
            try:
                fact = Fact(key)
            except ValueError:
                return None
            self._cache[key] = self._collect(fact)
        return self._cache[key]

    def flush(self, name: Fact | str) -> None:
        self._cache.pop(enum_value(name), None)

    def _collect(self, fact: Fact) -> str | None:
        if fact == Fact.OS_NAME:
            return self._os_name()
        if fact == Fact.OS_FAMILY:
            os_name = self.value(Fact.OS_NAME)
            return OS_FAMILIES.get(os_name) if os_name else None
        if fact == Fact.OS_RELEASE:
            return self._os_release().get("VERSION_ID") or None
        return self._persistence_package_version()

    def _os_release(self) -> dict[str, str]:
        try:
            return platform.freedesktop_os_release()
        except OSError:
            logger.debug("No os-release file found")
            return {}

    def _os_name(self) -> str | None:
        os_id = self._os_release().get("ID")
        if not os_id:
            return None
        return OS_NAMES.get(os_id, os_id.capitalize())

    def _persistence_package_version(self) -> str | None:
        os_name = self.value(Fact.OS_NAME)
        if os_name not in ("Debian", "Ubuntu"):
            return None

        release = self.value(Fact.OS_RELEASE) or "0"
        if (os_name == "Debian" and versioncmp(release, "8.0") >= 0) or (
            os_name == "Ubuntu" and versioncmp(release, "14.10") >= 0
        ):
            package = "netfilter-persistent"
        else:
            package = "iptables-persistent"

        try:
            version = self.executor(["dpkg-query", "-Wf", "${Version}", package]).strip()
        except ExecutionFailure as e:
            logger.debug(f"{package} is not installed: {e}")
            return None

        if not _HAS_VERSION.search(version):
            return None
        return version
