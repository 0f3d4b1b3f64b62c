"""Install pipeline: fetch, verify, place, smoke test.

The pipeline installs one executable from a formula:
1. resolve_source: fetch the release archive for the target platform
2. verify: check the SHA-256 digest of the archive bytes
3. extract_and_place: copy the binary into the destination directory atomically
4. smoke_test: run the installed binary with its test arguments

Steps run strictly in order and the first failure ends the install. Each step
returns its value or an InstallError; nothing is written to the destination
directory before the archive has been verified and the entry read.
"""

import hashlib
import logging
import os
import tempfile
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from formula_kit.integrations.fetcher.abc import ArtifactFetcher, FetchFailure
from formula_kit.integrations.runner.abc import BinaryRunner, RunFailure
from formula_kit.models.formula import Formula
from formula_kit.models.receipt import InstallReceipt
from formula_kit.models.results import (
    ErrorType,
    FetchedArchive,
    InstallError,
    InstallSuccess,
    SmokeTestResult,
)
from formula_kit.operations.archives import (
    ArchiveReadFailure,
    ArchiveType,
    infer_archive_type,
    read_archive_entry,
)

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def sha256_hexdigest(content: bytes) -> str:
    """Lowercase hex SHA-256 of content."""
    return hashlib.sha256(content).hexdigest()


def resolve_source(
    formula: Formula, fetcher: ArtifactFetcher, platform: str
) -> FetchedArchive | InstallError:
    """Fetch the release archive for platform.

    Returns:
        FetchedArchive with the resolved URL and bytes, or InstallError with
        error_type not_found_error (HTTP 404, missing file) or network_error
    """
    url = formula.render_url(platform)
    logger.debug("Resolved %s %s source: %s", formula.name, formula.version, url)

    content = fetcher.fetch(url)
    if isinstance(content, FetchFailure):
        error_type: ErrorType = (
            "not_found_error" if content.failure_type == "not_found" else "network_error"
        )
        details: dict[str, str | int] = {"url": url}
        if content.status_code is not None:
            details["status_code"] = content.status_code
        return InstallError(
            stage="fetch",
            error_type=error_type,
            message=content.message,
            details=details,
        )

    return FetchedArchive(url=url, content=content)


def verify(content: bytes, integrity_digest: str) -> bytes | InstallError:
    """Check content against the expected SHA-256 digest (case-insensitive hex).

    Returns:
        content unchanged on a match, InstallError with integrity_error otherwise
    """
    actual = sha256_hexdigest(content)
    expected = integrity_digest.strip().lower()
    if actual != expected:
        return InstallError(
            stage="verify",
            error_type="integrity_error",
            message="SHA-256 of the downloaded archive does not match the formula",
            details={"expected": expected, "actual": actual},
        )
    logger.debug("SHA-256 verified: %s", actual)
    return content


def _prepare_destination(destination_dir: Path) -> InstallError | None:
    """Ensure destination_dir exists and is writable."""
    if destination_dir.exists() and not destination_dir.is_dir():
        return InstallError(
            stage="place",
            error_type="permission_error",
            message=f"Destination is not a directory: {destination_dir}",
            details={"destination": str(destination_dir)},
        )

    if not destination_dir.exists():
        try:
            destination_dir.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            return InstallError(
                stage="place",
                error_type="permission_error",
                message=f"Cannot create destination directory: {destination_dir}",
                details={"destination": str(destination_dir)},
            )

    if not os.access(destination_dir, os.W_OK):
        return InstallError(
            stage="place",
            error_type="permission_error",
            message=f"Destination directory is not writable: {destination_dir}",
            details={"destination": str(destination_dir)},
        )

    return None


def previous_binary_path(destination_dir: Path, entry_name: str) -> Path:
    """Where an existing binary is kept while its replacement is smoke tested."""
    return destination_dir / f".{entry_name}.previous"


def _write_executable_atomically(target: Path, data: bytes, previous_path: Path | None) -> None:
    """Write data to target through a temp file in the same directory.

    When previous_path is given, an existing file at target is moved there
    before the new file takes its place. The temp file is removed, and the
    previous file moved back, if anything (including KeyboardInterrupt)
    happens before the final os.replace().
    """
    fd, temp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".partial"
    )
    temp_path = Path(temp_name)
    moved_previous = False
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        temp_path.chmod(EXECUTABLE_MODE)
        if previous_path is not None and target.is_file():
            os.replace(target, previous_path)
            moved_previous = True
        os.replace(temp_path, target)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        if moved_previous and previous_path is not None:
            os.replace(previous_path, target)
        raise


def extract_and_place(
    content: bytes,
    entry_name: str,
    destination_dir: Path,
    archive_type: ArchiveType,
    *,
    previous_path: Path | None = None,
) -> Path | InstallError:
    """Copy entry_name from the archive into destination_dir as an executable.

    Args:
        content: Verified archive bytes
        entry_name: Archive entry to install, also the installed file name
        destination_dir: Directory receiving the executable
        archive_type: Format of content
        previous_path: If given, an existing binary is moved here instead of
            being overwritten, so the caller can restore it

    Returns:
        Path of the installed file, or InstallError with extraction_error
        (malformed archive, missing or ambiguous entry) or permission_error
        (destination cannot be written)
    """
    if not entry_name or Path(entry_name).name != entry_name or entry_name in (".", ".."):
        return InstallError(
            stage="place",
            error_type="extraction_error",
            message=f"Invalid entry name: {entry_name!r}",
        )

    entry = read_archive_entry(content, entry_name, archive_type)
    if isinstance(entry, ArchiveReadFailure):
        return InstallError(
            stage="place",
            error_type="extraction_error",
            message=entry.message,
            details={"entry": entry_name, "archive_type": archive_type},
        )

    destination_error = _prepare_destination(destination_dir)
    if destination_error is not None:
        return destination_error

    target = destination_dir / entry_name
    if target.is_dir():
        return InstallError(
            stage="place",
            error_type="permission_error",
            message=f"A directory already exists at {target}",
            details={"destination": str(destination_dir)},
        )

    if previous_path is not None and not target.is_file():
        previous_path.unlink(missing_ok=True)

    try:
        _write_executable_atomically(target, entry, previous_path)
    except OSError as e:
        return InstallError(
            stage="place",
            error_type="permission_error",
            message=f"Cannot write {target}: {e}",
            details={"destination": str(destination_dir)},
        )

    logger.debug("Placed %s (%d bytes)", target, len(entry))
    return target


def smoke_test(
    binary_path: Path,
    args: Sequence[str],
    runner: BinaryRunner,
    timeout_seconds: float,
) -> SmokeTestResult | InstallError:
    """Run the installed binary once with args.

    Returns:
        SmokeTestResult with the exit status (non-zero is reported, not
        converted), or InstallError if the binary could not be run at all
    """
    output = runner.run(binary_path, args, timeout_seconds)
    if isinstance(output, RunFailure):
        return InstallError(
            stage="smoke_test",
            error_type="installation_verification_error",
            message=output.message,
            details={"binary": str(binary_path)},
        )
    return SmokeTestResult(exit_code=output.exit_code, stdout=output.stdout, stderr=output.stderr)


def _roll_back(placed: Path, previous_path: Path) -> str:
    """Undo a placement whose smoke test failed.

    Returns:
        What was done, for the error details
    """
    if previous_path.is_file():
        os.replace(previous_path, placed)
        logger.debug("Restored previous binary at %s", placed)
        return "restored previous binary"
    placed.unlink(missing_ok=True)
    logger.debug("Removed %s", placed)
    return "removed new binary"


def install_formula(
    formula: Formula,
    *,
    fetcher: ArtifactFetcher,
    runner: BinaryRunner,
    destination_dir: Path,
    platform: str,
    timeout_seconds: float,
) -> InstallSuccess | InstallError:
    """Run the full install pipeline for one formula.

    A binary that fails its smoke test does not stay installed: the binary it
    replaced is restored, or the new file is removed on a fresh install.

    Args:
        formula: Formula to install
        fetcher: Source of archive bytes
        runner: Used for the smoke test
        destination_dir: Directory receiving the executable
        platform: Target triple substituted into the source URL
        timeout_seconds: Smoke test timeout

    Returns:
        InstallSuccess with the receipt to record, or the InstallError of the
        first failing stage
    """
    fetched = resolve_source(formula, fetcher, platform)
    if isinstance(fetched, InstallError):
        return fetched

    verified = verify(fetched.content, formula.integrity_digest)
    if isinstance(verified, InstallError):
        return verified

    archive_type = infer_archive_type(fetched.url)
    if archive_type is None:
        return InstallError(
            stage="place",
            error_type="extraction_error",
            message=f"Unsupported archive type for {fetched.url} (expected .zip, .tar.gz or .tar)",
            details={"url": fetched.url},
        )

    previous_path = previous_binary_path(destination_dir, formula.entry_name)
    placed = extract_and_place(
        verified, formula.entry_name, destination_dir, archive_type, previous_path=previous_path
    )
    if isinstance(placed, InstallError):
        return placed

    result = smoke_test(placed, formula.test_args, runner, timeout_seconds)
    if isinstance(result, InstallError):
        rollback = _roll_back(placed, previous_path)
        return InstallError(
            stage=result.stage,
            error_type=result.error_type,
            message=result.message,
            details={**result.details, "rollback": rollback},
        )

    if not result.passed:
        rollback = _roll_back(placed, previous_path)
        args_str = " ".join(formula.test_args)
        details: dict[str, str | int] = {"binary": str(placed), "exit_code": result.exit_code}
        stderr = result.stderr.strip()
        if stderr:
            details["stderr"] = stderr
        details["rollback"] = rollback
        return InstallError(
            stage="smoke_test",
            error_type="installation_verification_error",
            message=f"'{placed} {args_str}' exited with status {result.exit_code}",
            details=details,
        )

    previous_path.unlink(missing_ok=True)

    receipt = InstallReceipt(
        name=formula.name,
        version=formula.version,
        source_url=fetched.url,
        sha256=formula.integrity_digest,
        binary_path=placed,
        installed_at=datetime.now(UTC).isoformat(),
    )
    return InstallSuccess(binary_path=placed, receipt=receipt, smoke_test=result)
