"""
Rule Value Translation Module

Converts symbolic ICMP types, log levels, service names and packet
marks into the numeric values used in iptables rules.
"""

from fwutil.translate.core import (
    ICMP_TYPES,
    LOG_LEVELS,
    icmp_name_to_number,
    log_level_name_to_number,
    string_to_port,
    to_hex32,
)

__all__ = [
    "ICMP_TYPES",
    "LOG_LEVELS",
    "icmp_name_to_number",
    "log_level_name_to_number",
    "string_to_port",
    "to_hex32",
]
