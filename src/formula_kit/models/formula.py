"""Pydantic model for formula files (package descriptors)."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

SHA256_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")

VERSION_PLACEHOLDER = "{version}"
PLATFORM_PLACEHOLDER = "{platform}"

DEFAULT_TEST_ARGS = ("--version",)


def _validate_file_name(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    if "/" in value or "\\" in value:
        raise ValueError(f"{field_name} must be a plain file name, got {value!r}")
    if value in (".", ".."):
        raise ValueError(f"{field_name} must be a plain file name, got {value!r}")
    return value


class Formula(BaseModel):
    """Immutable descriptor of one release of a prebuilt binary.

    A formula is authored once per release and replaced wholesale on the next
    one. The YAML keys follow Homebrew naming (desc, url, sha256); the field
    names are accepted as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1, alias="desc")
    homepage: str = Field(..., min_length=1)
    source_url: str = Field(..., min_length=1, alias="url")
    integrity_digest: str = Field(..., alias="sha256")
    version: str = Field(..., min_length=1)
    binary: str | None = None
    test_args: tuple[str, ...] = DEFAULT_TEST_ARGS

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate name can be used as a file name."""
        return _validate_file_name(v, "name")

    @field_validator("binary")
    @classmethod
    def validate_binary(cls, v: str | None) -> str | None:
        """Validate binary entry name when given."""
        if v is None:
            return v
        return _validate_file_name(v, "binary")

    @field_validator("integrity_digest")
    @classmethod
    def validate_integrity_digest(cls, v: str) -> str:
        """Require a real SHA-256 hex digest.

        Placeholder values such as PUT_SHA256_CHECKSUM_HERE are rejected so a
        formula whose download cannot be verified never loads.
        """
        if not SHA256_HEX_PATTERN.match(v):
            raise ValueError(
                f"sha256 must be 64 hexadecimal characters, got {v!r}. "
                "Run 'formula-kit checksum <url>' to compute it."
            )
        return v.lower()

    @property
    def entry_name(self) -> str:
        """Name of the file to take from the archive and install."""
        if self.binary is not None:
            return self.binary
        return self.name

    def render_url(self, platform: str) -> str:
        """Substitute {version} and {platform} in the source URL template."""
        return self.source_url.replace(VERSION_PLACEHOLDER, self.version).replace(
            PLATFORM_PLACEHOLDER, platform
        )
