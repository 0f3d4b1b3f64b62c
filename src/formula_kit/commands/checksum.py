"""Checksum command: compute the SHA-256 for a formula's sha256 field."""

from pathlib import Path

import click

from formula_kit.cli.output import machine_output, user_output
from formula_kit.context_helpers import require_context
from formula_kit.error_boundary import cli_error_boundary
from formula_kit.integrations.fetcher.abc import FetchFailure
from formula_kit.operations.pipeline import sha256_hexdigest


@click.command("checksum")
@click.argument("source")
@click.pass_context
@cli_error_boundary
def checksum(ctx: click.Context, source: str) -> None:
    """Print the SHA-256 of SOURCE, a local file or a URL.

    Output matches sha256sum: "<digest>  <source>".
    """
    fk = require_context(ctx)

    local_path = Path(source)
    if local_path.is_file():
        content = local_path.read_bytes()
    else:
        fetched = fk.fetcher.fetch(source)
        if isinstance(fetched, FetchFailure):
            user_output(f"Error: {fetched.message}")
            raise SystemExit(1)
        content = fetched

    machine_output(f"{sha256_hexdigest(content)}  {source}")
