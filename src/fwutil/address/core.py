"""
Core address normalization.

Turns hostnames, bare addresses and address/mask pairs into the CIDR
strings used as rule sources and destinations.
"""

import logging
import re
import socket
from typing import Callable

import dns.exception
import dns.resolver
from netaddr import AddrFormatError, IPNetwork

from fwutil.config import get_config
from fwutil.errors import HostResolutionError
from fwutil.models import AddressFamily, enum_value

logger = logging.getLogger(__name__)

Resolver = Callable[[str], list[str]]

FAMILY_VERSIONS = {
    AddressFamily.IPV4.value: 4,
    AddressFamily.IPV6.value: 6,
}

_NEGATED = re.compile(r"^(!)\s*(.*)$")


def resolve_addresses(
    hostname: str,
    family: AddressFamily | str | None = None,
    nameservers: list[str] | None = None,
    timeout: float = 5.0,
) -> list[str]:
    """Resolve a hostname to its addresses.

    Uses the system resolver (hosts file and DNS) unless nameservers are
    given, in which case A and AAAA records are queried directly.

    Args:
        hostname: Name to resolve
        family: Preferred family; its records are listed first
        nameservers: DNS servers to query instead of the system resolver
        timeout: DNS query timeout in seconds

    Returns:
        Address literals in resolver order, possibly empty
    """
    addresses: list[str] = []

    if nameservers:
        resolver = dns.resolver.Resolver(configure=False)
        resolver.nameservers = nameservers
        resolver.timeout = timeout
        resolver.lifetime = timeout

        record_types = ["A", "AAAA"]
        if family is not None and enum_value(family) == AddressFamily.IPV6.value:
            record_types.reverse()

        for rtype in record_types:
            try:
                answers = resolver.resolve(hostname, rtype)
            except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.NoNameservers):
                continue
            except dns.exception.DNSException as e:
                logger.debug(f"{rtype} lookup for {hostname} failed: {e}")
                continue
            for rdata in answers:
                address = str(rdata)
                if address not in addresses:
                    addresses.append(address)
        return addresses

    try:
        results = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        logger.debug(f"System lookup for {hostname} failed: {e}")
        return addresses

    for _, _, _, _, sockaddr in results:
        address = sockaddr[0]
        if address not in addresses:
            addresses.append(address)
    return addresses


def _parse_network(value: str, version: int | None = None) -> IPNetwork | None:
    try:
        if version is None:
            return IPNetwork(value)
        return IPNetwork(value, version=version)
    except (AddrFormatError, ValueError, TypeError):
        return None


def _default_resolver(family: AddressFamily | str) -> Resolver:
    config = get_config()

    def resolve(hostname: str) -> list[str]:
        return resolve_addresses(
            hostname,
            family=family,
            nameservers=config.nameservers or None,
            timeout=config.resolver_timeout,
        )

    return resolve


def host_to_ip(
    value: str,
    proto: AddressFamily | str | None = None,
    resolver: Resolver | None = None,
) -> str | None:
    """Convert an address or hostname to CIDR notation.

    - IPv4 addresses are qualified with /32, IPv6 with /128
    - CIDR and dotted-quad netmasks are normalized, host bits cleared
    - Hostnames are resolved under the family given by proto
    - A prefix length of zero returns None, meaning "any address"

    Args:
        value: Address, network or hostname
        proto: "IPv4" or "IPv6"; only required for hostnames
        resolver: Callable returning address literals for a hostname

    Returns:
        CIDR string, or None for a zero-length prefix

    Raises:
        ValueError: If a hostname is given without a supported family
        HostResolutionError: If the hostname has no usable address
    """
    network = _parse_network(value)

    if network is None:
        if proto is None:
            raise ValueError("Proto must be specified for a hostname")
        family = enum_value(proto)
        version = FAMILY_VERSIONS.get(family)
        if version is None:
            raise ValueError(f"Unsupported address family: {family}")

        if resolver is None:
            resolver = _default_resolver(family)

        for address in resolver(value):
            network = _parse_network(address, version)
            if network is not None:
                break

        if network is None:
            raise HostResolutionError(value)
        logger.debug(f"Resolved {value} to {network.ip} ({family})")

    if network.prefixlen == 0:
        return None
    return str(network.cidr)


def host_to_mask(
    value: str,
    proto: AddressFamily | str | None = None,
    resolver: Resolver | None = None,
) -> str | None:
    """Convert a possibly negated address to CIDR notation.

    "! 10.0.0.1" becomes "! 10.0.0.1/32". The address part follows the
    rules of host_to_ip, and a zero-length prefix drops the negation too.
    """
    match = _NEGATED.match(value)
    if not match:
        return host_to_ip(value, proto, resolver)

    cidr = host_to_ip(match.group(2), proto, resolver)
    if cidr is None:
        return None
    return f"{match.group(1)} {cidr}"
