"""
Rule value translation CLI commands.
"""

import click
from rich.console import Console

from fwutil.errors import PortLookupError
from fwutil.translate.core import (
    icmp_name_to_number,
    log_level_name_to_number,
    string_to_port,
    to_hex32,
)


def _print_mapping(console: Console, value: str, result: str | None, what: str) -> None:
    if result is None:
        console.print(f"[yellow]No {what} mapping for '{value}'[/yellow]")
        raise SystemExit(1)
    console.print(result, highlight=False)


@click.group()
def translate():
    """Translate symbolic rule values to numbers."""
    pass


@translate.command()
@click.argument("name")
@click.option(
    "-f", "--family",
    type=click.Choice(["inet", "inet6"]),
    default="inet",
    help="Protocol family",
)
def icmp(name: str, family: str):
    """Translate an ICMP type name to its code.

    Examples:
        fwutil translate icmp echo-request
        fwutil translate icmp echo-request -f inet6
    """
    console = Console()
    _print_mapping(console, name, icmp_name_to_number(name, family), "ICMP type")


@translate.command("log-level")
@click.argument("name")
def log_level(name: str):
    """Translate a syslog level name to its number.

    Examples:
        fwutil translate log-level warning
    """
    console = Console()
    _print_mapping(console, name, log_level_name_to_number(name), "log level")


@translate.command()
@click.argument("value")
@click.option("-p", "--proto", default="tcp", help="Transport protocol (tcp or udp)")
def port(value: str, proto: str):
    """Translate a service name to a port number.

    Examples:
        fwutil translate port ssh
        fwutil translate port "! domain" -p udp
        fwutil translate port 8000-8080
    """
    console = Console()

    try:
        result = string_to_port(value, proto)
    except (PortLookupError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(result, highlight=False)


@translate.command("hex")
@click.argument("value")
def hex_mark(value: str):
    """Format a packet mark as a 32-bit hex value.

    Examples:
        fwutil translate hex 255
        fwutil translate hex 0xFF
    """
    console = Console()
    result = to_hex32(value)
    if result is None:
        console.print(f"[yellow]'{value}' is not a 32-bit integer[/yellow]")
        raise SystemExit(1)
    console.print(result, highlight=False)
