"""Binary execution abstraction.

Used to smoke test installed binaries. Real implementations spawn a process;
fakes return configured exit codes so tests never execute downloaded files.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunOutput:
    """Completed run of a binary."""

    exit_code: int
    stdout: str
    stderr: str


@dataclass(frozen=True)
class RunFailure:
    """The binary could not be run to completion (missing, not executable, timed out)."""

    message: str


class BinaryRunner(ABC):
    """Abstract interface for running an installed binary."""

    @abstractmethod
    def run(
        self, binary_path: Path, args: Sequence[str], timeout_seconds: float
    ) -> RunOutput | RunFailure:
        """Run binary_path with args and wait for it to exit.

        Args:
            binary_path: Absolute path of the executable
            args: Arguments passed to the executable
            timeout_seconds: Kill the process after this many seconds

        Returns:
            RunOutput with exit code and captured output, or RunFailure if the
            process could not be spawned or did not finish in time
        """
        ...
