"""Host platform detection for release archive URLs.

Release archives are named by target triple, for example
ecs-exec-x86_64-apple-darwin.zip. This module maps the running host to the
triple substituted for {platform} in a formula URL.
"""

import platform
import sys

_OS_SUFFIXES = {
    "darwin": "apple-darwin",
    "linux": "unknown-linux-gnu",
    "win32": "pc-windows-msvc",
}

_ARCH_NAMES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


def detect_platform_triple(system: str | None = None, machine: str | None = None) -> str:
    """Return the target triple for the host (or the given system/machine).

    Args:
        system: sys.platform style name (defaults to the running interpreter's)
        machine: platform.machine() style name (defaults to the running host's)

    Raises:
        ValueError: If the operating system or architecture has no known triple
    """
    resolved_system = system if system is not None else sys.platform
    resolved_machine = machine if machine is not None else platform.machine()

    os_key = "linux" if resolved_system.startswith("linux") else resolved_system
    if os_key not in _OS_SUFFIXES:
        raise ValueError(
            f"Unsupported operating system: {resolved_system}. Pass --platform explicitly."
        )

    arch_key = resolved_machine.lower()
    if arch_key not in _ARCH_NAMES:
        raise ValueError(
            f"Unsupported architecture: {resolved_machine}. Pass --platform explicitly."
        )

    return f"{_ARCH_NAMES[arch_key]}-{_OS_SUFFIXES[os_key]}"
