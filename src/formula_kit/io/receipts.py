"""Receipt file I/O for receipts.toml."""

from pathlib import Path

import tomli
import tomli_w

from formula_kit.models.receipt import InstallReceipt

RECEIPTS_FILENAME = "receipts.toml"


def get_receipts_path(state_dir: Path) -> Path:
    """Get the receipts.toml path inside the state directory."""
    return state_dir / RECEIPTS_FILENAME


def load_receipts(state_dir: Path) -> dict[str, InstallReceipt]:
    """Load install receipts keyed by formula name.

    Returns an empty dict if no receipts file exists yet.
    """
    receipts_path = get_receipts_path(state_dir)
    if not receipts_path.exists():
        return {}

    with open(receipts_path, "rb") as f:
        data = tomli.load(f)

    receipts: dict[str, InstallReceipt] = {}
    for name, receipt_data in data.get("formulas", {}).items():
        receipts[name] = InstallReceipt(
            name=name,
            version=receipt_data["version"],
            source_url=receipt_data["source_url"],
            sha256=receipt_data["sha256"],
            binary_path=Path(receipt_data["binary_path"]),
            installed_at=receipt_data["installed_at"],
        )

    return receipts


def save_receipts(state_dir: Path, receipts: dict[str, InstallReceipt]) -> None:
    """Write receipts.toml, creating the state directory if needed."""
    state_dir.mkdir(parents=True, exist_ok=True)

    formulas: dict[str, dict[str, str]] = {}
    for name, receipt in sorted(receipts.items()):
        formulas[name] = {
            "version": receipt.version,
            "source_url": receipt.source_url,
            "sha256": receipt.sha256,
            "binary_path": str(receipt.binary_path),
            "installed_at": receipt.installed_at,
        }

    with open(get_receipts_path(state_dir), "wb") as f:
        tomli_w.dump({"formulas": formulas}, f)


def record_receipt(state_dir: Path, receipt: InstallReceipt) -> None:
    """Add or replace the receipt for one formula."""
    receipts = load_receipts(state_dir)
    save_receipts(state_dir, {**receipts, receipt.name: receipt})
