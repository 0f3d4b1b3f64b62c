"""formula-kit: Install prebuilt CLI binaries from formula files.

Import from submodules:
- version: __version__
- operations.pipeline: install_formula and its individual steps
"""

from formula_kit.version import __version__ as __version__
