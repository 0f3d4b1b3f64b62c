"""Install command: fetch, verify, place and smoke test a formula."""

from pathlib import Path

import click

from formula_kit.cli.output import user_output
from formula_kit.cli.rendering import format_install_error
from formula_kit.context_helpers import require_context
from formula_kit.core.platforms import detect_platform_triple
from formula_kit.error_boundary import cli_error_boundary
from formula_kit.io.formula import load_formula
from formula_kit.io.receipts import record_receipt
from formula_kit.models.results import InstallError
from formula_kit.operations.pipeline import install_formula


@click.command("install")
@click.argument("formula_path", metavar="FORMULA", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--bin-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Install into this directory instead of the configured bin_dir",
)
@click.option(
    "--platform",
    "platform_triple",
    default=None,
    help="Target triple for the {platform} URL placeholder (default: detected)",
)
@click.pass_context
@cli_error_boundary
def install(
    ctx: click.Context, formula_path: Path, bin_dir: Path | None, platform_triple: str | None
) -> None:
    """Install the binary described by FORMULA.

    Exits non-zero if any stage fails: fetch, verification, extraction or
    smoke test. An archive that fails verification is never extracted.

    Examples:

        formula-kit install Formula/ecs-exec.yaml

        formula-kit install Formula/ecs-exec.yaml --bin-dir /usr/local/bin
    """
    fk = require_context(ctx)
    formula = load_formula(formula_path)
    destination = bin_dir if bin_dir is not None else fk.config.bin_dir
    platform = platform_triple if platform_triple is not None else detect_platform_triple()

    user_output(f"Installing {formula.name} {formula.version} ({platform}) to {destination}...")

    result = install_formula(
        formula,
        fetcher=fk.fetcher,
        runner=fk.runner,
        destination_dir=destination,
        platform=platform,
        timeout_seconds=fk.config.timeout_seconds,
    )

    if isinstance(result, InstallError):
        user_output(format_install_error(result))
        raise SystemExit(1)

    record_receipt(fk.config.state_dir, result.receipt)

    user_output(f"✓ Installed {formula.name} {formula.version}")
    user_output(f"  Location: {result.binary_path}")
    version_line = result.smoke_test.stdout.strip()
    if version_line:
        user_output(f"  Reports: {version_line.splitlines()[0]}")
