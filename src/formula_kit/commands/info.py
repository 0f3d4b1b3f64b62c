"""Info command: show formula fields and the resolved source URL."""

from pathlib import Path

import click

from formula_kit.cli.output import user_output
from formula_kit.context_helpers import require_context
from formula_kit.core.platforms import detect_platform_triple
from formula_kit.error_boundary import cli_error_boundary
from formula_kit.io.formula import load_formula
from formula_kit.io.receipts import load_receipts


@click.command("info")
@click.argument("formula_path", metavar="FORMULA", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--platform",
    "platform_triple",
    default=None,
    help="Target triple for the {platform} URL placeholder (default: detected)",
)
@click.pass_context
@cli_error_boundary
def info(ctx: click.Context, formula_path: Path, platform_triple: str | None) -> None:
    """Show the fields of FORMULA and where it would be fetched from."""
    fk = require_context(ctx)
    formula = load_formula(formula_path)
    platform = platform_triple if platform_triple is not None else detect_platform_triple()

    user_output(f"{formula.name} {formula.version}")
    user_output(f"  {formula.description}")
    user_output(f"  Homepage: {formula.homepage}")
    user_output(f"  URL:      {formula.render_url(platform)}")
    user_output(f"  SHA-256:  {formula.integrity_digest}")
    user_output(f"  Binary:   {formula.entry_name}")
    user_output(f"  Test:     {formula.entry_name} {' '.join(formula.test_args)}")

    receipts = load_receipts(fk.config.state_dir)
    if formula.name in receipts:
        receipt = receipts[formula.name]
        user_output(f"  Installed: {receipt.version} at {receipt.binary_path}")
    else:
        user_output("  Installed: no")
