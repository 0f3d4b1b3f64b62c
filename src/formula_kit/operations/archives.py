"""In-memory archive reading.

Release archives are opened from bytes, never unpacked to disk. Only the one
entry being installed is read.
"""

import gzip
import io
import tarfile
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Literal
from urllib.parse import urlparse

ArchiveType = Literal["zip", "tar", "tar.gz"]

_SUFFIX_TYPES: list[tuple[str, ArchiveType]] = [
    (".zip", "zip"),
    (".tar.gz", "tar.gz"),
    (".tgz", "tar.gz"),
    (".tar", "tar"),
]


@dataclass(frozen=True)
class ArchiveReadFailure:
    """The archive could not be read or does not contain the requested entry."""

    message: str


def infer_archive_type(url: str) -> ArchiveType | None:
    """Infer the archive type from the file name at the end of url.

    Returns:
        The archive type, or None when the suffix is not recognized
    """
    file_name = PurePosixPath(urlparse(url).path).name.lower()
    for suffix, archive_type in _SUFFIX_TYPES:
        if file_name.endswith(suffix):
            return archive_type
    return None


def _select_member(names: list[str], entry_name: str) -> str | ArchiveReadFailure:
    """Pick the member for entry_name: exact path first, then a unique basename."""
    if entry_name in names:
        return entry_name

    matches = [name for name in names if PurePosixPath(name).name == entry_name]
    if not matches:
        return ArchiveReadFailure(message=f"Entry {entry_name!r} not found in archive")
    if len(matches) > 1:
        joined = ", ".join(sorted(matches))
        return ArchiveReadFailure(
            message=f"Entry {entry_name!r} is ambiguous in archive: {joined}"
        )
    return matches[0]


def _read_zip_entry(data: bytes, entry_name: str) -> bytes | ArchiveReadFailure:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            names = [info.filename for info in archive.infolist() if not info.is_dir()]
            selected = _select_member(names, entry_name)
            if isinstance(selected, ArchiveReadFailure):
                return selected
            return archive.read(selected)
    # NotImplementedError: unknown compression method, RuntimeError: encrypted entry
    except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as e:
        return ArchiveReadFailure(message=f"Malformed zip archive: {e}")


def _read_tar_entry(data: bytes, entry_name: str, mode: str) -> bytes | ArchiveReadFailure:
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode=mode) as archive:
            members = {member.name: member for member in archive.getmembers() if member.isfile()}
            selected = _select_member(list(members), entry_name)
            if isinstance(selected, ArchiveReadFailure):
                return selected
            extracted = archive.extractfile(members[selected])
            if extracted is None:
                return ArchiveReadFailure(message=f"Entry {selected!r} has no content")
            return extracted.read()
    except (tarfile.TarError, gzip.BadGzipFile, zlib.error, EOFError) as e:
        return ArchiveReadFailure(message=f"Malformed tar archive: {e}")


def read_archive_entry(
    data: bytes, entry_name: str, archive_type: ArchiveType
) -> bytes | ArchiveReadFailure:
    """Return the bytes of entry_name inside an archive held in memory.

    Args:
        data: Archive bytes
        entry_name: Member path, or a file name matching exactly one member's basename
        archive_type: Format of data

    Returns:
        Entry content, or ArchiveReadFailure if the archive is malformed or
        the entry is missing or ambiguous
    """
    if archive_type == "zip":
        return _read_zip_entry(data, entry_name)
    if archive_type == "tar.gz":
        return _read_tar_entry(data, entry_name, "r:gz")
    return _read_tar_entry(data, entry_name, "r:")
