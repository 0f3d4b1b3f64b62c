"""Uninstall operation for formulas recorded in receipts.toml."""

import logging
from dataclasses import dataclass
from pathlib import Path

from formula_kit.io.receipts import load_receipts, save_receipts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UninstallResult:
    """Result of uninstalling a formula.

    Attributes:
        name: Formula name that was requested
        was_installed: False if no receipt existed (nothing was changed)
        removed_binary: Path of the deleted executable, None if it was already gone
    """

    name: str
    was_installed: bool
    removed_binary: Path | None


def uninstall_formula(name: str, state_dir: Path) -> UninstallResult:
    """Remove the installed binary and receipt for name.

    Only the path recorded in the receipt is deleted.
    """
    receipts = load_receipts(state_dir)
    if name not in receipts:
        return UninstallResult(name=name, was_installed=False, removed_binary=None)

    receipt = receipts[name]
    removed_binary: Path | None = None
    if receipt.binary_path.is_file():
        receipt.binary_path.unlink()
        removed_binary = receipt.binary_path
        logger.debug("Removed %s", receipt.binary_path)

    remaining = {key: value for key, value in receipts.items() if key != name}
    save_receipts(state_dir, remaining)

    return UninstallResult(name=name, was_installed=True, removed_binary=removed_binary)
