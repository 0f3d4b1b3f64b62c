"""Tests for in-memory archive reading."""

import pytest

from formula_kit.operations.archives import (
    ArchiveReadFailure,
    infer_archive_type,
    read_archive_entry,
)
from tests.fixtures import BINARY_CONTENT, make_tar, make_zip


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://example.com/ecs-exec-x86_64-apple-darwin.zip", "zip"),
        ("https://example.com/tool.tar.gz", "tar.gz"),
        ("https://example.com/tool.TGZ", "tar.gz"),
        ("https://example.com/tool.tar", "tar"),
        ("https://example.com/tool.zip?token=abc", "zip"),
        ("file:///tmp/tool.zip", "zip"),
        ("https://example.com/tool.dmg", None),
        ("https://example.com/tool", None),
    ],
)
def test_infer_archive_type(url: str, expected: str | None) -> None:
    assert infer_archive_type(url) == expected


def test_read_zip_entry_at_root() -> None:
    data = make_zip({"ecs-exec": BINARY_CONTENT, "README.md": b"docs"})

    assert read_archive_entry(data, "ecs-exec", "zip") == BINARY_CONTENT


def test_read_zip_entry_in_subdirectory() -> None:
    """Test that a unique basename match is found inside a directory."""
    data = make_zip({"ecs-exec-v0.1.0/ecs-exec": BINARY_CONTENT})

    assert read_archive_entry(data, "ecs-exec", "zip") == BINARY_CONTENT


def test_read_zip_entry_prefers_exact_path() -> None:
    data = make_zip({"ecs-exec": BINARY_CONTENT, "docs/ecs-exec": b"manual"})

    assert read_archive_entry(data, "ecs-exec", "zip") == BINARY_CONTENT


def test_read_zip_entry_ambiguous() -> None:
    data = make_zip({"darwin/ecs-exec": b"one", "linux/ecs-exec": b"two"})

    result = read_archive_entry(data, "ecs-exec", "zip")

    assert isinstance(result, ArchiveReadFailure)
    assert "ambiguous" in result.message
    assert "darwin/ecs-exec" in result.message


def test_read_zip_entry_missing() -> None:
    data = make_zip({"README.md": b"docs"})

    result = read_archive_entry(data, "ecs-exec", "zip")

    assert result == ArchiveReadFailure(message="Entry 'ecs-exec' not found in archive")


def test_read_zip_malformed() -> None:
    result = read_archive_entry(b"this is not a zip file", "ecs-exec", "zip")

    assert isinstance(result, ArchiveReadFailure)
    assert result.message.startswith("Malformed zip archive")


def test_read_zip_truncated() -> None:
    """Test that a cut-off download is reported, not raised."""
    data = make_zip({"ecs-exec": BINARY_CONTENT * 100})

    result = read_archive_entry(data[: len(data) // 2], "ecs-exec", "zip")

    assert isinstance(result, ArchiveReadFailure)


def test_read_tar_gz_entry() -> None:
    data = make_tar({"ecs-exec-v0.1.0/ecs-exec": BINARY_CONTENT}, gzipped=True)

    assert read_archive_entry(data, "ecs-exec", "tar.gz") == BINARY_CONTENT


def test_read_plain_tar_entry() -> None:
    data = make_tar({"ecs-exec": BINARY_CONTENT}, gzipped=False)

    assert read_archive_entry(data, "ecs-exec", "tar") == BINARY_CONTENT


def test_read_tar_entry_missing() -> None:
    data = make_tar({"README.md": b"docs"}, gzipped=True)

    result = read_archive_entry(data, "ecs-exec", "tar.gz")

    assert isinstance(result, ArchiveReadFailure)
    assert "not found" in result.message


def test_read_tar_gz_malformed() -> None:
    result = read_archive_entry(b"\x1f\x8b garbage", "ecs-exec", "tar.gz")

    assert isinstance(result, ArchiveReadFailure)
    assert result.message.startswith("Malformed tar archive")


def test_read_zip_bytes_as_tar() -> None:
    """Test that a zip served under a .tar.gz name is reported as malformed."""
    data = make_zip({"ecs-exec": BINARY_CONTENT})

    result = read_archive_entry(data, "ecs-exec", "tar.gz")

    assert isinstance(result, ArchiveReadFailure)


def _patch_central_directory(data: bytes, *, offset: int, value: int) -> bytes:
    """Overwrite a 2-byte field of the last central directory header."""
    header = data.rindex(b"PK\x01\x02")
    patched = bytearray(data)
    patched[header + offset : header + offset + 2] = value.to_bytes(2, "little")
    return bytes(patched)


def test_read_zip_unknown_compression_method() -> None:
    """Test that an entry compressed with an unsupported method is reported."""
    data = _patch_central_directory(make_zip({"ecs-exec": BINARY_CONTENT}), offset=10, value=99)

    result = read_archive_entry(data, "ecs-exec", "zip")

    assert isinstance(result, ArchiveReadFailure)
    assert result.message.startswith("Malformed zip archive")


def test_read_zip_encrypted_entry() -> None:
    """Test that a password-protected entry is reported instead of raised."""
    data = _patch_central_directory(make_zip({"ecs-exec": BINARY_CONTENT}), offset=8, value=0x1)

    result = read_archive_entry(data, "ecs-exec", "zip")

    assert isinstance(result, ArchiveReadFailure)
    assert "encrypted" in result.message
