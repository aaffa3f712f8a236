"""
Core rule value translation.

Converts symbolic ICMP types, syslog levels, service names and packet
marks into the numeric forms iptables expects.
"""

import logging
import re
import socket

from fwutil.errors import PortLookupError
from fwutil.models import IcmpFamily, Transport, enum_value

logger = logging.getLogger(__name__)


ICMP_TYPES_V4 = {
    "echo-reply": "0",
    "destination-unreachable": "3",
    "source-quench": "4",
    "redirect": "6",
    "echo-request": "8",
    "router-advertisement": "9",
    "router-solicitation": "10",
    "time-exceeded": "11",
    "parameter-problem": "12",
    "timestamp-request": "13",
    "timestamp-reply": "14",
    "address-mask-request": "17",
    "address-mask-reply": "18",
}

ICMP_TYPES_V6 = {
    "destination-unreachable": "1",
    "too-big": "2",
    "time-exceeded": "3",
    "parameter-problem": "4",
    "echo-request": "128",
    "echo-reply": "129",
    "router-solicitation": "133",
    "router-advertisement": "134",
    "neighbour-solicitation": "135",
    "neighbour-advertisement": "136",
    "redirect": "137",
}

ICMP_TYPES = {
    IcmpFamily.INET.value: ICMP_TYPES_V4,
    IcmpFamily.INET6.value: ICMP_TYPES_V6,
}

# syslog(3) severities
LOG_LEVELS = {
    "panic": "0",
    "alert": "1",
    "crit": "2",
    "err": "3",
    "error": "3",
    "warn": "4",
    "warning": "4",
    "not": "5",
    "notice": "5",
    "info": "6",
    "debug": "7",
}

_NUMERIC_ICMP = re.compile(r"\d{1,2}$")
_NUMERIC_LEVEL = re.compile(r"[0-7]")
_PORT_TOKEN = re.compile(r"^(!\s+)?(\S+)")
_NUMERIC_PORT = re.compile(r"^\d+(-\d+)?$")
_LEGACY_OCTAL = re.compile(r"[+-]?0[0-7_]+")

HEX32_MAX = 0xFFFFFFFF


def icmp_name_to_number(value: str, protocol: IcmpFamily | str) -> str | None:
    """Translate a symbolic ICMP type name to its numeric code.

    Values that already end in a one or two digit number are returned
    unchanged for any family.

    Args:
        value: ICMP type name (e.g. "echo-request") or number
        protocol: "inet" or "inet6"

    Returns:
        The numeric code as a string, or None if the name is unknown

    Raises:
        ValueError: If protocol is not inet or inet6
    """
    value = str(value)
    if _NUMERIC_ICMP.search(value):
        return value

    family = enum_value(protocol)
    table = ICMP_TYPES.get(family)
    if table is None:
        raise ValueError(f"unsupported protocol family '{family}'")
    return table.get(value)


def log_level_name_to_number(value: str) -> str | None:
    """Convert a syslog level name to its number (0-7)."""
    value = str(value)
    if _NUMERIC_LEVEL.fullmatch(value):
        return value
    return LOG_LEVELS.get(value)


def string_to_port(value: str, proto: Transport | str = Transport.TCP) -> str:
    """Convert a service name to a port number.

    Numeric ports and ranges such as "22" or "22-1000" are returned as
    given. A leading "! " negation is kept verbatim.

    Args:
        value: Port token, optionally negated (e.g. "! http")
        proto: "tcp" or "udp"; anything else is treated as tcp

    Returns:
        The port token with service names replaced by numbers

    Raises:
        ValueError: If value holds no port token
        PortLookupError: If the service name is unknown
    """
    proto = enum_value(proto)
    if proto not in (Transport.TCP.value, Transport.UDP.value):
        proto = Transport.TCP.value

    match = _PORT_TOKEN.match(str(value))
    if not match:
        raise ValueError(f"Invalid port value: {value!r}")

    negation = match.group(1) or ""
    word = match.group(2)
    if _NUMERIC_PORT.match(word):
        return f"{negation}{word}"

    try:
        port = socket.getservbyname(word, proto)
    except OSError as e:
        raise PortLookupError(f"Unknown service '{word}' for protocol {proto}") from e

    logger.debug(f"Resolved service {word}/{proto} to port {port}")
    return f"{negation}{port}"


def to_hex32(value) -> str | None:
    """Validate an integer-like value and format it as a 32-bit hex mark.

    Strings are parsed with base detection, so "0xFF", "255", "0377" and
    "0b11111111" all yield "0xff". A bare leading zero means octal. Returns
    None for non-integers and values outside 0..0xFFFFFFFF.
    """
    try:
        if isinstance(value, str):
            text = value.strip()
            if _LEGACY_OCTAL.fullmatch(text):
                number = int(text, 8)
            else:
                number = int(text, 0)
        else:
            number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None

    if 0 <= number <= HEX32_MAX:
        return f"0x{number:x}"
    return None
