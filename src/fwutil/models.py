"""
Shared enumerations for rule values and persistence.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from enum import Enum


class AddressFamily(str, Enum):
    """Address family used for hostname resolution and rule persistence."""

    IPV4 = "IPv4"
    IPV6 = "IPv6"


class IcmpFamily(str, Enum):
    """Protocol family for ICMP type lookups."""

    INET = "inet"
    INET6 = "inet6"


class Transport(str, Enum):
    """Transport protocols with a service database."""

    TCP = "tcp"
    UDP = "udp"


class OsKey(str, Enum):
    """Persistence strategy selected for a platform."""

    REDHAT = "RedHat"
    FEDORA = "Fedora"
    DEBIAN = "Debian"
    DEBIAN_MANUAL = "Debian_manual"
    ARCHLINUX = "Archlinux"
    AMAZON = "Amazon"
    SUSE = "Suse"


def enum_value(value) -> str:
    """Return the plain string for an enum member or any other value."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
