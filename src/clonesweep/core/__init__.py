"""
Core scan engine — walker, hashers, grouper, stages and the scan coordinator.

This package contains the performance-critical foundation of clonesweep:
- FileWalkerImpl: recursive, symlink-safe directory traversal
- Sha256HasherImpl + XXHashFrontHasherImpl: streaming content hashing
- FileGrouperImpl: size and hash-based grouping with duplicate filtering
- ScanCoordinator: one-scan-at-a-time pipeline with cancellation
- Models: FileRecord, DuplicateGroup, DeleteOutcome, PreviewResult, ScanParams

All components are pure Python with no GUI dependencies, usable from the CLI and from servers.
"""

from .models import (
    FileRecord, DuplicateGroup, DeleteOutcome, PreviewResult, PreviewKind,
    ScanMode, ScanParams, ScanStats, Stage, size_only_digest)
from .errors import ScanError, InvalidRootError, ScanBusyError, HashingError, FileChangedError
from .walker import FileWalkerImpl
from .hasher import Sha256HasherImpl, XXHashFrontHasherImpl
from .grouper import FileGrouperImpl
from .stages import SizeStage, FrontHashStage, DigestStage
from .coordinator import ScanCoordinator, ScanState

__all__ = [
    "FileRecord",
    "DuplicateGroup",
    "DeleteOutcome",
    "PreviewResult",
    "PreviewKind",
    "ScanMode",
    "ScanParams",
    "ScanStats",
    "Stage",
    "size_only_digest",
    "ScanError",
    "InvalidRootError",
    "ScanBusyError",
    "HashingError",
    "FileChangedError",
    "FileWalkerImpl",
    "Sha256HasherImpl",
    "XXHashFrontHasherImpl",
    "FileGrouperImpl",
    "SizeStage",
    "FrontHashStage",
    "DigestStage",
    "ScanCoordinator",
    "ScanState",
]
