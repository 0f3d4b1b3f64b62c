"""I/O operations for formula-kit."""

from formula_kit.io.formula import load_formula
from formula_kit.io.receipts import (
    load_receipts,
    record_receipt,
    save_receipts,
)

__all__ = [
    "load_formula",
    "load_receipts",
    "record_receipt",
    "save_receipts",
]
