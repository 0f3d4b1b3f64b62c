"""Result types for the install pipeline.

Every pipeline step returns either its success value or an InstallError.
Expected failures (a checksum mismatch, a 404, a broken archive) are values,
not exceptions, so callers branch with isinstance().

Error Types:
    - network_error: transport failure or unexpected HTTP status
    - not_found_error: the source archive does not exist (HTTP 404, missing file)
    - integrity_error: SHA-256 of the fetched bytes does not match the formula
    - extraction_error: archive is malformed, of unknown type, or lacks the entry
    - permission_error: destination directory cannot be written
    - installation_verification_error: smoke test could not run or exited non-zero
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from formula_kit.models.receipt import InstallReceipt

ErrorType = Literal[
    "network_error",
    "not_found_error",
    "integrity_error",
    "extraction_error",
    "permission_error",
    "installation_verification_error",
]

InstallStage = Literal["fetch", "verify", "place", "smoke_test"]


def _empty_details() -> dict[str, str | int]:
    """Factory for empty details dict (helps type inference)."""
    return {}


@dataclass(frozen=True)
class InstallError:
    """Failure of one pipeline stage. Terminal for the install."""

    stage: InstallStage
    error_type: ErrorType
    message: str
    details: dict[str, str | int] = field(default_factory=_empty_details)


@dataclass(frozen=True)
class FetchedArchive:
    """Archive bytes fetched from a resolved source URL."""

    url: str
    content: bytes


@dataclass(frozen=True)
class SmokeTestResult:
    """Outcome of running the installed binary."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def passed(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class InstallSuccess:
    """Result of a confirmed install."""

    binary_path: Path
    receipt: InstallReceipt
    smoke_test: SmokeTestResult
