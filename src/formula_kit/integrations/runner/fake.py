"""Fake binary runner for testing without spawning processes."""

from collections.abc import Sequence
from pathlib import Path

from formula_kit.integrations.runner.abc import BinaryRunner, RunFailure, RunOutput


class FakeBinaryRunner(BinaryRunner):
    """In-memory runner that records calls instead of executing anything.

    All runs succeed with exit code 0 by default. Configure a different
    outcome through the constructor.

    Example:
        runner = FakeBinaryRunner(exit_code=2, stderr="boom")
        output = runner.run(Path("/bin/tool"), ["--version"], 5.0)
        assert output.exit_code == 2
        assert runner.run_calls == [(Path("/bin/tool"), ("--version",))]
    """

    def __init__(
        self,
        *,
        exit_code: int = 0,
        stdout: str = "",
        stderr: str = "",
        failure: RunFailure | None = None,
    ) -> None:
        self._exit_code = exit_code
        self._stdout = stdout
        self._stderr = stderr
        self._failure = failure
        self._run_calls: list[tuple[Path, tuple[str, ...]]] = []

    @property
    def run_calls(self) -> list[tuple[Path, tuple[str, ...]]]:
        """(binary_path, args) pairs passed to run(), in call order.

        This property is for test assertions only.
        """
        return self._run_calls.copy()

    def run(
        self, binary_path: Path, args: Sequence[str], timeout_seconds: float
    ) -> RunOutput | RunFailure:
        self._run_calls.append((binary_path, tuple(args)))
        if self._failure is not None:
            return self._failure
        return RunOutput(exit_code=self._exit_code, stdout=self._stdout, stderr=self._stderr)
