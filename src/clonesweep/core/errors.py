"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception hierarchy for the scan engine.

Scan-fatal conditions derive from ScanError and reach the caller.
Entry-local conditions derive from HashingError and are absorbed by the grouper.
"""


class ScanError(RuntimeError):
    """A scan could not run at all."""


class InvalidRootError(ScanError):
    """Root path is missing, not a directory, or unreadable."""

    def __init__(self, root_dir: str, reason: str):
        self.root_dir = root_dir
        self.reason = reason
        super().__init__(f"{reason}: {root_dir}")


class ScanBusyError(ScanError):
    """Another scan is already running on this coordinator."""


class HashingError(OSError):
    """A single file could not be hashed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class FileChangedError(HashingError):
    """The file no longer matches the size recorded at enumeration time."""

    def __init__(self, path: str, expected_size: int, actual_size: int):
        self.expected_size = expected_size
        self.actual_size = actual_size
        super().__init__(path, f"File changed during scan (expected {expected_size} bytes, got {actual_size})")
