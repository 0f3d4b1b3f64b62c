"""Operations for formula-kit.

Import from submodules:
- archives: ArchiveType, ArchiveReadFailure, infer_archive_type, read_archive_entry
- pipeline: resolve_source, verify, extract_and_place, smoke_test, install_formula
- uninstall: UninstallResult, uninstall_formula
"""
