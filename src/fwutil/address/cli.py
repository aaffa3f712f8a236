"""
Address normalization CLI commands.
"""

import click
from rich.console import Console
from rich.table import Table

from fwutil.address.core import host_to_ip, host_to_mask, resolve_addresses
from fwutil.config import get_config
from fwutil.errors import HostResolutionError

FAMILY_CHOICE = click.Choice(["IPv4", "IPv6"])


def _resolver(family: str | None, server: str | None):
    if not server:
        return None
    config = get_config()
    return lambda hostname: resolve_addresses(
        hostname, family=family, nameservers=[server], timeout=config.resolver_timeout
    )


def _print_cidr(console: Console, value: str, result: str | None) -> None:
    if result is None:
        console.print(f"[yellow]'{value}' matches any address[/yellow]")
        raise SystemExit(1)
    console.print(result, highlight=False)


@click.group()
def address():
    """Normalize rule addresses to CIDR notation."""
    pass


@address.command("ip")
@click.argument("value")
@click.option("-f", "--family", type=FAMILY_CHOICE, help="Address family for hostnames")
@click.option("-s", "--server", help="DNS server to query")
def ip_cmd(value: str, family: str | None, server: str | None):
    """Convert an address, network or hostname to CIDR.

    Examples:
        fwutil address ip 10.0.0.1
        fwutil address ip 192.168.0.0/255.255.255.0
        fwutil address ip example.com -f IPv6
    """
    console = Console()

    try:
        result = host_to_ip(value, family, _resolver(family, server))
    except (ValueError, HostResolutionError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    _print_cidr(console, value, result)


@address.command()
@click.argument("value")
@click.option("-f", "--family", type=FAMILY_CHOICE, help="Address family for hostnames")
@click.option("-s", "--server", help="DNS server to query")
def mask(value: str, family: str | None, server: str | None):
    """Convert a possibly negated address to CIDR.

    Examples:
        fwutil address mask "! 10.0.0.0/8"
    """
    console = Console()

    try:
        result = host_to_mask(value, family, _resolver(family, server))
    except (ValueError, HostResolutionError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    _print_cidr(console, value, result)


@address.command()
@click.argument("hostname")
@click.option("-f", "--family", type=FAMILY_CHOICE, help="List this family first")
@click.option("-s", "--server", help="DNS server to query")
def resolve(hostname: str, family: str | None, server: str | None):
    """List the addresses a hostname resolves to.

    Examples:
        fwutil address resolve example.com
        fwutil address resolve example.com -s 1.1.1.1
    """
    console = Console()
    config = get_config()
    nameservers = [server] if server else config.nameservers or None

    addresses = resolve_addresses(
        hostname, family=family, nameservers=nameservers, timeout=config.resolver_timeout
    )
    if not addresses:
        console.print(f"[yellow]No addresses found for {hostname}[/yellow]")
        raise SystemExit(1)

    table = Table(title=f"Addresses: {hostname}", box=None)
    table.add_column("Address", style="white")
    table.add_column("IPv4 CIDR", style="cyan")
    table.add_column("IPv6 CIDR", style="cyan")

    for addr in addresses:
        try:
            cidr = host_to_ip(addr) or "-"
        except ValueError:
            # scoped link-local addresses such as fe80::1%eth0
            cidr = "-"
        if ":" in addr:
            table.add_row(addr, "-", cidr)
        else:
            table.add_row(addr, cidr, "-")

    console.print(table)
