"""
Rule Persistence Module

Selects and runs the distribution-specific command that saves
iptables rules across reboots.
"""

from fwutil.persist.core import (
    PERSIST_COMMANDS,
    PersistResult,
    command_for,
    persist_command,
    persist_iptables,
    resolve_os_key,
)
from fwutil.persist.execute import run_command
from fwutil.persist.facts import Fact, FactProvider, StaticFacts, SystemFacts
from fwutil.persist.version import versioncmp

__all__ = [
    "PERSIST_COMMANDS",
    "PersistResult",
    "command_for",
    "persist_command",
    "persist_iptables",
    "resolve_os_key",
    "run_command",
    "Fact",
    "FactProvider",
    "StaticFacts",
    "SystemFacts",
    "versioncmp",
]
