"""
Rule persistence command resolution.

Works out which command saves the running iptables rules so they are
restored at boot, based on distribution, release and the installed
persistence package, and runs it on a best-effort basis.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import functools
import logging
import re
from dataclasses import dataclass

from fwutil.config import get_config
from fwutil.errors import ExecutionFailure
from fwutil.models import AddressFamily, OsKey, enum_value
from fwutil.persist.execute import Executor, run_command
from fwutil.persist.facts import Fact, FactProvider, SystemFacts
from fwutil.persist.version import versioncmp

logger = logging.getLogger(__name__)


# Distributions reported without an OS family
REDHAT_ALIASES = {
    "RedHat", "CentOS", "Fedora", "Scientific", "SL", "SLC", "Ascendos",
    "CloudLinux", "PSBM", "OracleLinux", "OVS", "OEL", "Amazon", "XenServer",
    "VirtuozzoLinux", "Rocky", "AlmaLinux",
}
DEBIAN_ALIASES = {"Debian", "Ubuntu"}

# RHEL 7 derivatives that persist through the iptables-services init script
SYSTEMD_REDHAT_NAMES = REDHAT_ALIASES - {"Fedora", "Amazon"}

# iptables-persistent before 0.5.0 has no save action
MANUAL_SAVE_BEFORE = "0.5.0"
# Versions after 1.0 ship the netfilter-persistent service
NETFILTER_PERSISTENT_AFTER = "1.0"

DEBIAN_NETFILTER = ("/usr/sbin/service", "netfilter-persistent", "save")
DEBIAN_LEGACY = ("/usr/sbin/service", "iptables-persistent", "save")


def _shell(command: str) -> tuple[str, ...]:
    return ("/bin/sh", "-c", command)


PERSIST_COMMANDS: dict[OsKey, dict[AddressFamily, tuple[str, ...] | None]] = {
    OsKey.REDHAT: {
        AddressFamily.IPV4: ("/sbin/service", "iptables", "save"),
        AddressFamily.IPV6: ("/sbin/service", "ip6tables", "save"),
    },
    OsKey.FEDORA: {
        AddressFamily.IPV4: ("/usr/libexec/iptables/iptables.init", "save"),
        AddressFamily.IPV6: ("/usr/libexec/iptables/ip6tables.init", "save"),
    },
    OsKey.DEBIAN: {
        AddressFamily.IPV4: DEBIAN_LEGACY,
        AddressFamily.IPV6: DEBIAN_LEGACY,
    },
    OsKey.DEBIAN_MANUAL: {
        AddressFamily.IPV4: _shell("/sbin/iptables-save > /etc/iptables/rules"),
        AddressFamily.IPV6: None,
    },
    OsKey.ARCHLINUX: {
        AddressFamily.IPV4: _shell("/usr/sbin/iptables-save > /etc/iptables/iptables.rules"),
        AddressFamily.IPV6: _shell("/usr/sbin/ip6tables-save > /etc/iptables/ip6tables.rules"),
    },
    OsKey.AMAZON: {
        AddressFamily.IPV4: _shell("/usr/sbin/iptables-save > /etc/sysconfig/iptables.rules"),
        AddressFamily.IPV6: _shell("/usr/sbin/ip6tables-save > /etc/sysconfig/ip6tables.rules"),
    },
    OsKey.SUSE: {
        AddressFamily.IPV4: _shell("/usr/sbin/iptables-save > /etc/sysconfig/iptables"),
        AddressFamily.IPV6: None,
    },
}


@dataclass
class PersistResult:
    """Outcome of a rule persistence attempt.

    family holds the requested value as given when it is not a known
    AddressFamily.
    """
    family: AddressFamily | str
    os_key: str | None
    command: tuple[str, ...] | None = None
    output: str | None = None
    error: str | None = None

    @property
    def supported(self) -> bool:
        return self.command is not None

    @property
    def success(self) -> bool:
        return self.supported and self.error is None


def _major_release(release: str | None) -> int:
    match = re.match(r"\s*(\d+)", release or "")
    return int(match.group(1)) if match else 0


def _address_family(proto: AddressFamily | str) -> AddressFamily | None:
    try:
        return AddressFamily(enum_value(proto))
    except ValueError:
        return None


def resolve_os_key(facts: FactProvider) -> str | None:
    """Work out the persistence strategy key for a host.

    Starts from the OS family, falling back to the distribution name, then
    refines it by release and persistence package version. Keys outside
    OsKey pass through unchanged and have no persistence command.
    """
    os_name = facts.value(Fact.OS_NAME)
    os_key = facts.value(Fact.OS_FAMILY)
    if not os_key:
        if os_name in REDHAT_ALIASES:
            os_key = OsKey.REDHAT.value
        elif os_name in DEBIAN_ALIASES:
            os_key = OsKey.DEBIAN.value
        else:
            os_key = os_name

    if os_key == OsKey.DEBIAN.value:
        # The package may have been installed after facts were first gathered
        facts.flush(Fact.PERSISTENCE_PACKAGE_VERSION)
        persist_ver = facts.value(Fact.PERSISTENCE_PACKAGE_VERSION)
        if persist_ver and versioncmp(persist_ver, MANUAL_SAVE_BEFORE) < 0:
            os_key = OsKey.DEBIAN_MANUAL.value

    if os_key == OsKey.REDHAT.value:
        release = _major_release(facts.value(Fact.OS_RELEASE))
        if os_name == "Fedora" and release >= 15:
            os_key = OsKey.FEDORA.value
        elif os_name in SYSTEMD_REDHAT_NAMES and release >= 7:
            os_key = OsKey.FEDORA.value
        elif os_name == "Amazon":
            os_key = OsKey.AMAZON.value

    return os_key


def command_for(
    os_key: str | None,
    family: AddressFamily | str | None,
    facts: FactProvider,
) -> tuple[str, ...] | None:
    """Look up the persistence command for an already resolved OS key.

    Unknown OS keys and families have no command.
    """
    try:
        key = OsKey(os_key)
    except ValueError:
        return None

    family = _address_family(family) if family is not None else None
    command = PERSIST_COMMANDS[key].get(family)
    if command is None:
        return None
    if key == OsKey.DEBIAN:
        persist_ver = facts.value(Fact.PERSISTENCE_PACKAGE_VERSION)
        if persist_ver and versioncmp(persist_ver, NETFILTER_PERSISTENT_AFTER) > 0:
            command = DEBIAN_NETFILTER
    return command


def persist_command(
    proto: AddressFamily | str,
    facts: FactProvider | None = None,
) -> tuple[str, ...] | None:
    """Return the command that saves rules for a family, or None if unsupported.

    Args:
        proto: "IPv4" or "IPv6"
        facts: Fact provider; defaults to facts of the running host
    """
    family = _address_family(proto)
    if family is None:
        return None
    if facts is None:
        facts = SystemFacts()
    return command_for(resolve_os_key(facts), family, facts)


def persist_iptables(
    proto: AddressFamily | str,
    facts: FactProvider | None = None,
    executor: Executor | None = None,
) -> PersistResult:
    """Save the running rules for a family so they survive a reboot.

    Persistence is best effort: an unsupported platform or address family is
    logged at info level and a failing command at warning level, and neither
    raises.

    Args:
        proto: "IPv4" or "IPv6"
        facts: Fact provider; defaults to facts of the running host
        executor: Runs the command and returns its output; defaults to
            run_command with the configured command timeout

    Returns:
        PersistResult describing what was run
    """
    logger.debug("[persist_iptables]")

    family = _address_family(proto) or enum_value(proto)
    if facts is None:
        facts = SystemFacts()
    os_key = resolve_os_key(facts)
    result = PersistResult(family=family, os_key=os_key)
    result.command = command_for(os_key, family, facts)
    if result.command is None:
        logger.info("firewall: Rule persistence is not supported for this type/OS")
        return result

    if executor is None:
        timeout = get_config().command_timeout
        executor = functools.partial(run_command, timeout=timeout)

    try:
        result.output = executor(result.command)
    except ExecutionFailure as detail:
        logger.warning(f"Unable to persist firewall rules: {detail}")
        result.error = str(detail)

    return result
