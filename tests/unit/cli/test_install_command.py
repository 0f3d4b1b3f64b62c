"""Tests for the install command."""

from pathlib import Path

from click.testing import CliRunner

from formula_kit.cli import cli
from formula_kit.context import FormulaKitContext
from formula_kit.core.global_config import GlobalConfig
from formula_kit.integrations.fetcher.fake import FakeArtifactFetcher
from formula_kit.integrations.runner.fake import FakeBinaryRunner
from formula_kit.io.receipts import load_receipts
from tests.fixtures import (
    BINARY_CONTENT,
    PLATFORM,
    RESOLVED_URL,
    default_archive,
    make_zip,
    sha256_of,
    write_formula,
)


def _config(tmp_path: Path) -> GlobalConfig:
    return GlobalConfig(
        bin_dir=tmp_path / "bin", state_dir=tmp_path / "state", timeout_seconds=5.0
    )


def test_install_success(tmp_path: Path) -> None:
    """Test that install places the binary, records a receipt and exits 0."""
    formula_path = write_formula(tmp_path / "ecs-exec.yaml")
    ctx = FormulaKitContext.for_test(
        fetcher=FakeArtifactFetcher(artifacts={RESOLVED_URL: default_archive()}),
        runner=FakeBinaryRunner(stdout="ecs-exec 0.1.3\n"),
        config=_config(tmp_path),
    )

    runner = CliRunner()
    result = runner.invoke(
        cli, ["install", str(formula_path), "--platform", PLATFORM], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert "✓ Installed ecs-exec v0.1.0" in result.output
    assert "Reports: ecs-exec 0.1.3" in result.output
    binary = tmp_path / "bin" / "ecs-exec"
    assert binary.read_bytes() == BINARY_CONTENT
    assert load_receipts(tmp_path / "state")["ecs-exec"].binary_path == binary


def test_install_bin_dir_option(tmp_path: Path) -> None:
    formula_path = write_formula(tmp_path / "ecs-exec.yaml")
    ctx = FormulaKitContext.for_test(
        fetcher=FakeArtifactFetcher(artifacts={RESOLVED_URL: default_archive()}),
        config=_config(tmp_path),
    )
    custom = tmp_path / "custom-bin"

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["install", str(formula_path), "--platform", PLATFORM, "--bin-dir", str(custom)],
        obj=ctx,
    )

    assert result.exit_code == 0, result.output
    assert (custom / "ecs-exec").exists()
    assert not (tmp_path / "bin").exists()


def test_install_corrupted_digest(tmp_path: Path) -> None:
    """Test that a digest mismatch exits non-zero and leaves no binary."""
    formula_path = write_formula(tmp_path / "ecs-exec.yaml", sha256="0" * 64)
    ctx = FormulaKitContext.for_test(
        fetcher=FakeArtifactFetcher(artifacts={RESOLVED_URL: default_archive()}),
        config=_config(tmp_path),
    )

    runner = CliRunner()
    result = runner.invoke(
        cli, ["install", str(formula_path), "--platform", PLATFORM], obj=ctx
    )

    assert result.exit_code == 1
    assert "Verification failed (integrity_error)" in result.output
    assert not (tmp_path / "bin" / "ecs-exec").exists()
    assert load_receipts(tmp_path / "state") == {}


def test_install_not_found(tmp_path: Path) -> None:
    formula_path = write_formula(tmp_path / "ecs-exec.yaml")
    ctx = FormulaKitContext.for_test(config=_config(tmp_path))

    runner = CliRunner()
    result = runner.invoke(
        cli, ["install", str(formula_path), "--platform", PLATFORM], obj=ctx
    )

    assert result.exit_code == 1
    assert "Fetch failed (not_found_error)" in result.output
    assert RESOLVED_URL in result.output


def test_install_smoke_test_failure(tmp_path: Path) -> None:
    formula_path = write_formula(tmp_path / "ecs-exec.yaml")
    ctx = FormulaKitContext.for_test(
        fetcher=FakeArtifactFetcher(artifacts={RESOLVED_URL: default_archive()}),
        runner=FakeBinaryRunner(exit_code=1, stderr="segfault\n"),
        config=_config(tmp_path),
    )

    runner = CliRunner()
    result = runner.invoke(
        cli, ["install", str(formula_path), "--platform", PLATFORM], obj=ctx
    )

    assert result.exit_code == 1
    assert "Smoke test failed (installation_verification_error)" in result.output
    assert "segfault" in result.output
    assert load_receipts(tmp_path / "state") == {}


def test_install_missing_formula_file(tmp_path: Path) -> None:
    ctx = FormulaKitContext.for_test(config=_config(tmp_path))

    runner = CliRunner()
    result = runner.invoke(
        cli, ["install", str(tmp_path / "missing.yaml"), "--platform", PLATFORM], obj=ctx
    )

    assert result.exit_code == 1
    assert "Error: Formula file not found" in result.output


def test_install_placeholder_digest(tmp_path: Path) -> None:
    """Test that an unfilled sha256 placeholder is rejected before any fetch."""
    formula_path = write_formula(tmp_path / "ecs-exec.yaml", sha256="PUT_SHA256_CHECKSUM_HERE")
    fetcher = FakeArtifactFetcher(artifacts={RESOLVED_URL: default_archive()})
    ctx = FormulaKitContext.for_test(fetcher=fetcher, config=_config(tmp_path))

    runner = CliRunner()
    result = runner.invoke(
        cli, ["install", str(formula_path), "--platform", PLATFORM], obj=ctx
    )

    assert result.exit_code == 1
    assert "64 hexadecimal characters" in result.output
    assert fetcher.fetched_urls == []


def test_install_without_context_object() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["install", "ecs-exec.yaml"], obj=object())

    assert result.exit_code == 1
    assert "Error: Context not initialized" in result.output


def test_failed_upgrade_keeps_working_install(tmp_path: Path) -> None:
    """Test that an upgrade failing its smoke test leaves v0.0.9 and its receipt in place."""
    old_archive = make_zip({"ecs-exec": b"OLD WORKING BINARY"})
    old_formula = write_formula(
        tmp_path / "ecs-exec-0.0.9.yaml", version="v0.0.9", sha256=sha256_of(old_archive)
    )
    new_formula = write_formula(tmp_path / "ecs-exec.yaml")
    fetcher = FakeArtifactFetcher(
        artifacts={
            RESOLVED_URL.replace("v0.1.0", "v0.0.9"): old_archive,
            RESOLVED_URL: default_archive(),
        }
    )
    runner = CliRunner()

    first = runner.invoke(
        cli,
        ["install", str(old_formula), "--platform", PLATFORM],
        obj=FormulaKitContext.for_test(fetcher=fetcher, config=_config(tmp_path)),
    )
    second = runner.invoke(
        cli,
        ["install", str(new_formula), "--platform", PLATFORM],
        obj=FormulaKitContext.for_test(
            fetcher=fetcher, runner=FakeBinaryRunner(exit_code=1), config=_config(tmp_path)
        ),
    )

    assert first.exit_code == 0, first.output
    assert second.exit_code == 1
    assert "rollback: restored previous binary" in second.output
    assert (tmp_path / "bin" / "ecs-exec").read_bytes() == b"OLD WORKING BINARY"
    assert load_receipts(tmp_path / "state")["ecs-exec"].version == "v0.0.9"


def test_failed_fresh_install_leaves_nothing_to_uninstall(tmp_path: Path) -> None:
    formula_path = write_formula(tmp_path / "ecs-exec.yaml")
    ctx = FormulaKitContext.for_test(
        fetcher=FakeArtifactFetcher(artifacts={RESOLVED_URL: default_archive()}),
        runner=FakeBinaryRunner(exit_code=1),
        config=_config(tmp_path),
    )

    runner = CliRunner()
    result = runner.invoke(
        cli, ["install", str(formula_path), "--platform", PLATFORM], obj=ctx
    )

    assert result.exit_code == 1
    assert not (tmp_path / "bin" / "ecs-exec").exists()
    assert load_receipts(tmp_path / "state") == {}
