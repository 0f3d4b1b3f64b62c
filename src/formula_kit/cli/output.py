"""Output helpers with clear intent.

user_output goes to stderr (progress, status, errors); machine_output goes to
stdout (values meant to be piped, such as checksums).
"""

import click


def user_output(message: str = "") -> None:
    """Print a human-facing message to stderr."""
    click.echo(message, err=True)


def machine_output(message: str) -> None:
    """Print a machine-readable value to stdout."""
    click.echo(message)
