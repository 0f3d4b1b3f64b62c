"""Real binary runner using subprocess."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from formula_kit.integrations.runner.abc import BinaryRunner, RunFailure, RunOutput

logger = logging.getLogger(__name__)


class SubprocessBinaryRunner(BinaryRunner):
    """Production implementation using subprocess.run().

    Non-zero exit codes are returned, not raised (check=False). Spawn errors
    and timeouts are converted to RunFailure.
    """

    def run(
        self, binary_path: Path, args: Sequence[str], timeout_seconds: float
    ) -> RunOutput | RunFailure:
        cmd = [str(binary_path), *args]
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            return RunFailure(message=f"{binary_path} did not exit within {timeout_seconds}s")
        except OSError as e:
            return RunFailure(message=f"Could not run {binary_path}: {e}")

        logger.debug("%s exited with %d", binary_path, result.returncode)
        return RunOutput(exit_code=result.returncode, stdout=result.stdout, stderr=result.stderr)
