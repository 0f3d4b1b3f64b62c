"""Helper functions for accessing the context with LBYL checks."""

import click

from formula_kit.context import FormulaKitContext


def require_context(ctx: click.Context) -> FormulaKitContext:
    """Get FormulaKitContext from click context, exiting with error if not initialized.

    Args:
        ctx: Click context (must have FormulaKitContext in ctx.obj)

    Returns:
        FormulaKitContext created at CLI entry

    Raises:
        SystemExit: If context not initialized (exits with code 1)

    Example:
        >>> @click.command()
        >>> @click.pass_context
        >>> def my_command(ctx: click.Context) -> None:
        ...     fk = require_context(ctx)
        ...     content = fk.fetcher.fetch(url)
    """
    if not isinstance(ctx.obj, FormulaKitContext):
        click.echo("Error: Context not initialized", err=True)
        raise SystemExit(1)

    return ctx.obj
