"""
fwutil command line entry point.
"""

import click

from fwutil import __version__
from fwutil.address.cli import address
from fwutil.config import get_config
from fwutil.logging_config import configure_logging
from fwutil.persist.cli import persist
from fwutil.translate.cli import translate


@click.group()
@click.version_option(__version__, prog_name="fwutil")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this file")
def main(debug: bool, log_file: str | None):
    """Firewall rule value utilities.

    Normalize iptables rule values and persist rules across reboots.
    """
    try:
        configure_logging(debug=debug, log_file=log_file, level=get_config().log_level)
    except ValueError as e:
        raise click.ClickException(f"FWUTIL_LOG_LEVEL: {e}") from None


main.add_command(translate)
main.add_command(address)
main.add_command(persist)


if __name__ == "__main__":
    main()
