"""
Address Normalization Module

Resolves hostnames and normalizes addresses and masks to CIDR notation.
"""

from fwutil.address.core import (
    host_to_ip,
    host_to_mask,
    resolve_addresses,
)

__all__ = [
    "host_to_ip",
    "host_to_mask",
    "resolve_addresses",
]
