"""List command: show installed formulas from receipts.toml."""

import click

from formula_kit.cli.output import user_output
from formula_kit.context_helpers import require_context
from formula_kit.error_boundary import cli_error_boundary
from formula_kit.io.receipts import load_receipts


@click.command("list")
@click.pass_context
@cli_error_boundary
def list_installed(ctx: click.Context) -> None:
    """List installed formulas."""
    fk = require_context(ctx)
    receipts = load_receipts(fk.config.state_dir)

    if not receipts:
        user_output("No formulas installed")
        return

    for name in sorted(receipts):
        receipt = receipts[name]
        marker = "" if receipt.binary_path.exists() else " (missing)"
        user_output(f"{name} {receipt.version}  {receipt.binary_path}{marker}")
