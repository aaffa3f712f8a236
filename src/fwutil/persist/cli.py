"""
Rule persistence CLI commands.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json

import click
from rich.console import Console
from rich.table import Table

from fwutil.persist.core import PersistResult, command_for, persist_iptables, resolve_os_key
from fwutil.persist.facts import Fact, FactProvider, StaticFacts, SystemFacts
from fwutil.models import AddressFamily, enum_value

FAMILY_CHOICE = click.Choice(["IPv4", "IPv6", "all"])


def _families(family: str) -> list[AddressFamily]:
    if family == "all":
        return [AddressFamily.IPV4, AddressFamily.IPV6]
    return [AddressFamily(family)]


def _facts(
    os_family: str | None,
    os_name: str | None,
    os_release: str | None,
    package_version: str | None,
) -> FactProvider:
    overrides = {
        Fact.OS_FAMILY.value: os_family,
        Fact.OS_NAME.value: os_name,
        Fact.OS_RELEASE.value: os_release,
        Fact.PERSISTENCE_PACKAGE_VERSION.value: package_version,
    }
    if not any(overrides.values()):
        return SystemFacts()
    return StaticFacts(overrides)


@click.group()
def persist():
    """Persist iptables rules across reboots."""
    pass


@persist.command()
@click.option("-f", "--family", type=FAMILY_CHOICE, default="all", help="Address family")
@click.option("--os-family", help="Override the OS family fact")
@click.option("--os-name", help="Override the distribution name fact")
@click.option("--os-release", help="Override the release fact")
@click.option("--package-version", help="Override the persistence package version fact")
@click.option("--json", "-j", "output_json", is_flag=True, help="Output as JSON")
def show(
    family: str,
    os_family: str | None,
    os_name: str | None,
    os_release: str | None,
    package_version: str | None,
    output_json: bool,
):
    """Show the command that would persist rules, without running it.

    Facts are read from this host unless any override is given, in which
    case only the given overrides are used.

    Examples:
        fwutil persist show
        fwutil persist show --os-name Fedora --os-release 20
        fwutil persist show --os-family Debian --package-version 0.4.0 -f IPv6
    """
    console = Console()
    facts = _facts(os_family, os_name, os_release, package_version)
    os_key = resolve_os_key(facts)
    commands = {fam.value: command_for(os_key, fam, facts) for fam in _families(family)}

    if output_json:
        data = {
            "os_key": os_key,
            "commands": {fam: list(cmd) if cmd else None for fam, cmd in commands.items()},
        }
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title=f"Rule Persistence: {os_key or 'unknown OS'}", box=None)
    table.add_column("Family", style="cyan")
    table.add_column("Command", style="white")

    for fam, cmd in commands.items():
        if cmd is None:
            table.add_row(fam, "[yellow]not supported[/yellow]")
        else:
            table.add_row(fam, " ".join(cmd))

    console.print(table)


def _print_result(console: Console, result: PersistResult) -> None:
    family = enum_value(result.family)
    if not result.supported:
        console.print(f"[yellow]{family}: persistence not supported on {result.os_key or 'this OS'}[/yellow]")
    elif result.error:
        console.print(f"[red]{family}: failed:[/red] {result.error}")
    else:
        console.print(f"[green]{family}: saved[/green] ({' '.join(result.command)})")


@persist.command()
@click.option("-f", "--family", type=FAMILY_CHOICE, default="all", help="Address family")
def save(family: str):
    """Save the running rules on this host.

    Examples:
        fwutil persist save
        fwutil persist save -f IPv4
    """
    console = Console()
    facts = SystemFacts()

    results = [persist_iptables(fam, facts) for fam in _families(family)]
    for result in results:
        _print_result(console, result)

    if any(r.error for r in results):
        raise SystemExit(1)
