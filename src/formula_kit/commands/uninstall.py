"""Uninstall command."""

import click

from formula_kit.cli.output import user_output
from formula_kit.context_helpers import require_context
from formula_kit.error_boundary import cli_error_boundary
from formula_kit.operations.uninstall import uninstall_formula


@click.command("uninstall")
@click.argument("name")
@click.pass_context
@cli_error_boundary
def uninstall(ctx: click.Context, name: str) -> None:
    """Remove the installed binary for formula NAME."""
    fk = require_context(ctx)
    result = uninstall_formula(name, fk.config.state_dir)

    if not result.was_installed:
        user_output(f"Error: {name} is not installed")
        raise SystemExit(1)

    if result.removed_binary is None:
        user_output(f"✓ Uninstalled {name} (binary was already missing)")
    else:
        user_output(f"✓ Uninstalled {name}: removed {result.removed_binary}")
