"""
fwutil - Firewall Rule Value Utilities

Normalizes human-entered iptables rule attributes (ICMP types, log levels,
ports, addresses, marks) into canonical form, and resolves the command
used to persist rules across Linux distributions.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
