"""Install receipt model."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class InstallReceipt:
    """Represents a confirmed install recorded in receipts.toml."""

    name: str
    version: str
    source_url: str
    sha256: str
    binary_path: Path
    installed_at: str
