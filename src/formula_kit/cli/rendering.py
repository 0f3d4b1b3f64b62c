"""Rendering of pipeline results for the terminal."""

from formula_kit.models.results import InstallError

_STAGE_LABELS = {
    "fetch": "Fetch",
    "verify": "Verification",
    "place": "Extraction",
    "smoke_test": "Smoke test",
}


def format_install_error(error: InstallError) -> str:
    """Format an InstallError as a multi-line message naming the failing stage.

    Example:
        Error: Verification failed (integrity_error)
          SHA-256 of the downloaded archive does not match the formula
          expected: 000...
          actual: e72...
    """
    label = _STAGE_LABELS[error.stage]
    lines = [f"Error: {label} failed ({error.error_type})", f"  {error.message}"]
    for key, value in error.details.items():
        if key == "stderr":
            lines.append(f"  {key}:")
            lines.extend(f"    {line}" for line in str(value).splitlines())
        else:
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)
