"""Application context with dependency injection.

The FormulaKitContext dataclass holds all dependencies (fetcher, runner,
config) and is created once at CLI entry point, then threaded through the
application via click's context object.
"""

from dataclasses import dataclass
from pathlib import Path

from formula_kit.core.global_config import (
    FilesystemGlobalConfigOps,
    GlobalConfig,
    load_global_config,
)
from formula_kit.integrations.fetcher.abc import ArtifactFetcher
from formula_kit.integrations.runner.abc import BinaryRunner


@dataclass(frozen=True)
class FormulaKitContext:
    """Immutable context holding all dependencies for formula-kit operations.

    Attributes:
        fetcher: Fetches release archives
        runner: Runs installed binaries for smoke tests
        config: Global configuration (bin dir, state dir, timeout)
        debug: Debug flag (DEBUG logging)
    """

    fetcher: ArtifactFetcher
    runner: BinaryRunner
    config: GlobalConfig
    debug: bool

    @staticmethod
    def for_test(
        fetcher: ArtifactFetcher | None = None,
        runner: BinaryRunner | None = None,
        config: GlobalConfig | None = None,
        debug: bool = False,
    ) -> "FormulaKitContext":
        """Create test context with optional pre-configured implementations.

        Uses fakes by default to avoid network access and subprocess calls.

        Args:
            fetcher: Optional ArtifactFetcher. If None, creates empty FakeArtifactFetcher.
            runner: Optional BinaryRunner. If None, creates FakeBinaryRunner (exit code 0).
            config: Optional GlobalConfig. If None, uses paths under /fake.
            debug: Whether to enable debug mode (default False).

        Example:
            >>> fetcher = FakeArtifactFetcher(artifacts={url: archive_bytes})
            >>> ctx = FormulaKitContext.for_test(
            ...     fetcher=fetcher,
            ...     config=GlobalConfig(
            ...         bin_dir=tmp_path / "bin", state_dir=tmp_path, timeout_seconds=5
            ...     ),
            ... )
        """
        from formula_kit.integrations.fetcher.fake import FakeArtifactFetcher
        from formula_kit.integrations.runner.fake import FakeBinaryRunner

        resolved_fetcher: ArtifactFetcher = (
            fetcher if fetcher is not None else FakeArtifactFetcher()
        )
        resolved_runner: BinaryRunner = runner if runner is not None else FakeBinaryRunner()
        resolved_config: GlobalConfig = (
            config if config is not None else GlobalConfig.defaults(Path("/fake/home"))
        )

        return FormulaKitContext(
            fetcher=resolved_fetcher,
            runner=resolved_runner,
            config=resolved_config,
            debug=debug,
        )


def create_context(*, debug: bool) -> FormulaKitContext:
    """Create production context with real implementations.

    Called once at CLI entry point. Loads ~/.formula-kit/config.toml when it
    exists, defaults otherwise.

    Raises:
        ValueError: If the config file is malformed
    """
    from formula_kit.integrations.fetcher.real import HttpxArtifactFetcher
    from formula_kit.integrations.runner.real import SubprocessBinaryRunner

    home = Path.home()
    config = load_global_config(FilesystemGlobalConfigOps(home), home)

    return FormulaKitContext(
        fetcher=HttpxArtifactFetcher(timeout_seconds=config.timeout_seconds),
        runner=SubprocessBinaryRunner(),
        config=config,
        debug=debug,
    )
