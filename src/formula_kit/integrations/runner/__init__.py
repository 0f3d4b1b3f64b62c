from formula_kit.integrations.runner.abc import BinaryRunner, RunFailure, RunOutput
from formula_kit.integrations.runner.real import SubprocessBinaryRunner

__all__ = [
    "BinaryRunner",
    "RunFailure",
    "RunOutput",
    "SubprocessBinaryRunner",
]
