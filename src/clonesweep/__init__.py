"""
clonesweep — duplicate file finder with safe, reversible deletion.

Core features:
- Two scan modes: STRICT (size + front hash + SHA-256) and SIZE_ONLY (size only)
- Parallel hashing on a bounded thread pool, with cancellation
- Safe deletion to system trash (via send2trash) with per-file failure reporting
- Image/text previews (Pillow)
- Optional Qt workers with PySide6 (install with [gui] extra)
- CLI interface for headless usage
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("clonesweep")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from clonesweep.core import (
    ScanCoordinator, ScanParams, ScanMode, ScanStats, FileRecord, DuplicateGroup,
    DeleteOutcome, PreviewResult, PreviewKind, ScanError, InvalidRootError, ScanBusyError)
from clonesweep.commands import scan_folder, get_file_preview, delete_files
from clonesweep.services import DuplicateService, DeletionService, FileService, PreviewService
from clonesweep.utils.convert_utils import ConvertUtils

__all__ = [
    "ScanCoordinator",
    "ScanParams",
    "ScanMode",
    "ScanStats",
    "FileRecord",
    "DuplicateGroup",
    "DeleteOutcome",
    "PreviewResult",
    "PreviewKind",
    "ScanError",
    "InvalidRootError",
    "ScanBusyError",
    "scan_folder",
    "get_file_preview",
    "delete_files",
    "DuplicateService",
    "DeletionService",
    "FileService",
    "PreviewService",
    "ConvertUtils",
    "__version__",
]
