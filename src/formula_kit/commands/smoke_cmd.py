"""Test command: run the smoke test against an installed formula."""

from pathlib import Path

import click

from formula_kit.cli.output import machine_output, user_output
from formula_kit.cli.rendering import format_install_error
from formula_kit.context_helpers import require_context
from formula_kit.error_boundary import cli_error_boundary
from formula_kit.io.formula import load_formula
from formula_kit.models.results import InstallError
from formula_kit.operations.pipeline import smoke_test


@click.command("test")
@click.argument("formula_path", metavar="FORMULA", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--bin-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory the binary was installed into (default: configured bin_dir)",
)
@click.pass_context
@cli_error_boundary
def smoke_test_command(ctx: click.Context, formula_path: Path, bin_dir: Path | None) -> None:
    """Run the smoke test for FORMULA's installed binary.

    The exit code mirrors the binary's exit code, or 128 + N when the binary
    is killed by signal N.
    """
    fk = require_context(ctx)
    formula = load_formula(formula_path)
    destination = bin_dir if bin_dir is not None else fk.config.bin_dir
    binary_path = destination / formula.entry_name

    if not binary_path.exists():
        user_output(f"Error: {formula.name} is not installed at {binary_path}")
        raise SystemExit(1)

    result = smoke_test(binary_path, formula.test_args, fk.runner, fk.config.timeout_seconds)
    if isinstance(result, InstallError):
        user_output(format_install_error(result))
        raise SystemExit(1)

    if result.stdout.strip():
        machine_output(result.stdout.rstrip())

    args_str = " ".join(formula.test_args)
    if not result.passed:
        if result.stderr.strip():
            user_output(result.stderr.rstrip())
        if result.exit_code < 0:
            signal_number = -result.exit_code
            user_output(
                f"✗ '{formula.entry_name} {args_str}' was killed by signal {signal_number}"
            )
            # Shell convention for a child killed by a signal
            raise SystemExit(128 + signal_number)
        user_output(f"✗ '{formula.entry_name} {args_str}' exited with status {result.exit_code}")
        raise SystemExit(result.exit_code)

    user_output(f"✓ '{formula.entry_name} {args_str}' exited with status 0")
