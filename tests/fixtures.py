"""Shared builders for formulas and in-memory archives."""

import hashlib
import io
import tarfile
import zipfile
from pathlib import Path
from typing import Any

import yaml

from formula_kit.models.formula import Formula

PLATFORM = "x86_64-apple-darwin"
VERSION = "v0.1.0"
URL_TEMPLATE = (
    "https://github.com/kyrylokulyhin/ecs-exec/releases/download/"
    "{version}/ecs-exec-{platform}.zip"
)
RESOLVED_URL = (
    "https://github.com/kyrylokulyhin/ecs-exec/releases/download/"
    "v0.1.0/ecs-exec-x86_64-apple-darwin.zip"
)
BINARY_CONTENT = b"#!/bin/sh\necho 'ecs-exec 0.1.3'\n"


def make_zip(entries: dict[str, bytes]) -> bytes:
    """Build a zip archive in memory from member name -> content."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def make_tar(entries: dict[str, bytes], *, gzipped: bool) -> bytes:
    """Build a tar (optionally gzipped) archive in memory."""
    buffer = io.BytesIO()
    mode = "w:gz" if gzipped else "w"
    with tarfile.open(fileobj=buffer, mode=mode) as archive:
        for name, content in entries.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(content)
            info.mode = 0o755
            archive.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def sha256_of(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def default_archive() -> bytes:
    """Zip holding a single ecs-exec entry."""
    return make_zip({"ecs-exec": BINARY_CONTENT})


def formula_data(**overrides: Any) -> dict[str, Any]:
    """Formula YAML mapping for ecs-exec v0.1.0 matching default_archive()."""
    data: dict[str, Any] = {
        "name": "ecs-exec",
        "desc": "CLI tool to execute commands in an AWS ECS container",
        "homepage": "https://github.com/kyrylokulyhin/ecs-exec",
        "url": URL_TEMPLATE,
        "sha256": sha256_of(default_archive()),
        "version": VERSION,
    }
    data.update(overrides)
    return data


def make_formula(**overrides: Any) -> Formula:
    return Formula.model_validate(formula_data(**overrides))


def write_formula(path: Path, **overrides: Any) -> Path:
    """Write a formula YAML file and return its path."""
    path.write_text(yaml.safe_dump(formula_data(**overrides)), encoding="utf-8")
    return path
