"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.formula-kit/config.toml.
Loaded eagerly at the CLI entry point; every key is optional.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in FormulaKitContext.
    All fields are read-only after construction.
    """

    bin_dir: Path
    state_dir: Path
    timeout_seconds: float

    @staticmethod
    def defaults(home: Path) -> "GlobalConfig":
        """Build the configuration used when no config file exists."""
        return GlobalConfig(
            bin_dir=home / ".local" / "bin",
            state_dir=home / ".formula-kit",
            timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
        )


class GlobalConfigOps(ABC):
    """Abstract interface for global config operations.

    Provides dependency injection for global config access, enabling
    in-memory implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if global config exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load global config.

        Returns:
            GlobalConfig instance with loaded values

        Raises:
            FileNotFoundError: If config doesn't exist
            ValueError: If config values are malformed
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the global config file.

        Returns:
            Path to config file (for error messages and debugging)
        """
        ...


class FilesystemGlobalConfigOps(GlobalConfigOps):
    """Production implementation that reads ~/.formula-kit/config.toml."""

    def __init__(self, home: Path | None = None) -> None:
        self._home = home if home is not None else Path.home()

    def exists(self) -> bool:
        """Check if global config file exists."""
        return self.path().exists()

    def load(self) -> GlobalConfig:
        """Load global config from ~/.formula-kit/config.toml.

        Keys missing from the file fall back to GlobalConfig.defaults().

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is malformed
        """
        config_path = self.path()

        if not config_path.exists():
            raise FileNotFoundError(f"Global config not found at {config_path}")

        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        defaults = GlobalConfig.defaults(self._home)

        bin_dir = data.get("bin_dir")
        if bin_dir is not None and not isinstance(bin_dir, str):
            raise ValueError(f"'bin_dir' must be a string in {config_path}")

        state_dir = data.get("state_dir")
        if state_dir is not None and not isinstance(state_dir, str):
            raise ValueError(f"'state_dir' must be a string in {config_path}")

        timeout = data.get("timeout_seconds", defaults.timeout_seconds)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError(f"'timeout_seconds' must be a positive number in {config_path}")

        return GlobalConfig(
            bin_dir=Path(bin_dir).expanduser() if bin_dir is not None else defaults.bin_dir,
            state_dir=Path(state_dir).expanduser() if state_dir is not None else defaults.state_dir,
            timeout_seconds=float(timeout),
        )

    def path(self) -> Path:
        """Get the path to the global config file.

        Returns:
            Path to ~/.formula-kit/config.toml
        """
        return self._home / ".formula-kit" / "config.toml"


class InMemoryGlobalConfigOps(GlobalConfigOps):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: GlobalConfig | None = None) -> None:
        """Initialize in-memory config ops.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        """Check if global config exists in memory."""
        return self._config is not None

    def load(self) -> GlobalConfig:
        """Load global config from memory.

        Raises:
            FileNotFoundError: If config doesn't exist in memory
        """
        if self._config is None:
            raise FileNotFoundError(f"Global config not found at {self.path()}")
        return self._config

    def path(self) -> Path:
        """Get fake path for error messages."""
        return Path("/fake/formula-kit/config.toml")


def load_global_config(ops: GlobalConfigOps, home: Path) -> GlobalConfig:
    """Load config through ops, using defaults when no config file exists."""
    if not ops.exists():
        return GlobalConfig.defaults(home)
    return ops.load()
