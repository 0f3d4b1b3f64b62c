"""Data models for formula-kit.

Import from submodules:
- formula: Formula
- receipt: InstallReceipt
- results: ErrorType, FetchedArchive, InstallError, InstallStage, InstallSuccess, SmokeTestResult
"""
