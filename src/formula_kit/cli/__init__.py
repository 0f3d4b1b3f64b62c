"""Static CLI definition for formula-kit."""

import logging
import os

import click

from formula_kit.commands.checksum import checksum
from formula_kit.commands.info import info
from formula_kit.commands.install import install
from formula_kit.commands.list_cmd import list_installed
from formula_kit.commands.smoke_cmd import smoke_test_command
from formula_kit.commands.uninstall import uninstall
from formula_kit.context import create_context
from formula_kit.error_boundary import cli_error_boundary
from formula_kit.version import __version__

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _configure_logging(debug: bool) -> None:
    if debug or os.getenv("FORMULA_KIT_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(name="formula-kit", context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context, debug: bool) -> None:
    """Install prebuilt CLI binaries from formula files."""
    _configure_logging(debug)

    # Tests inject a FormulaKitContext through CliRunner.invoke(obj=...)
    if ctx.obj is None:
        ctx.obj = create_context(debug=debug)


# Register all commands
cli.add_command(checksum)
cli.add_command(info)
cli.add_command(install)
cli.add_command(list_installed)
cli.add_command(smoke_test_command)
cli.add_command(uninstall)


def main() -> None:
    """Entry point with error boundary."""
    cli_error_boundary(cli)()


if __name__ == "__main__":
    main()
