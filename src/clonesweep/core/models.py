"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file scanning, duplicate grouping, deletion and previews.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable, Any
from pathlib import Path
from enum import Enum
import os
import logging

from clonesweep.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


# =============================
# Enums
# =============================

class ScanMode(Enum):
    """
    Scan mode controlling how duplicates are confirmed.
    """
    STRICT = "strict"
    SIZE_ONLY = "size_only"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            ScanMode.STRICT: "Strict",
            ScanMode.SIZE_ONLY: "Size only",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            ScanMode.STRICT:
                "Size → Front Hash → SHA-256 (byte-for-byte duplicates only)",
            ScanMode.SIZE_ONLY:
                "Size (fastest, files of equal size are reported even if content differs)",
        }
        return mapping.get(self, self.value)

    @classmethod
    def parse(cls, value: Union["ScanMode", str]) -> "ScanMode":
        """Accepts an enum member or its string value; anything else is rejected."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for mode in cls:
                if mode.value == value.strip().lower():
                    return mode
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Invalid scan mode: {value!r}. Valid options: {valid}")

    def __repr__(self) -> str:
        return self.value


class PreviewKind(Enum):
    IMAGE = "image"
    TEXT = "text"
    UNSUPPORTED = "unsupported"


class Stage(str, Enum):
    SIZE = "Size grouping"
    FRONT = "Front-chunk Hash"
    DIGEST = "SHA-256 Hash"

    @classmethod
    def get_all(cls):
        return [cls.SIZE, cls.FRONT, cls.DIGEST]


SIZE_ONLY_DIGEST_PREFIX = "size_"


def size_only_digest(size: int) -> str:
    """Sentinel digest for groups that were never content-verified."""
    return f"{SIZE_ONLY_DIGEST_PREFIX}{size}"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileRecord:
    """
    A regular file found by the walker.
    `size` is read once at enumeration time and never refreshed.
    """
    path: str
    name: str
    size: int  # in bytes
    extension: str = ""

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"File size cannot be negative: {self.path}")

    @classmethod
    def from_path(cls, path: Union[str, Path], size: int) -> "FileRecord":
        """Builds a record, deriving name and extension ("photo.JPG" → "jpg")."""
        path = str(path)
        name = os.path.basename(path)
        _, ext = os.path.splitext(name)
        return cls(path=path, name=name, size=size, extension=ext[1:].lower())

    def to_dict(self, digest: str) -> Dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "size": self.size,
            "hash": digest,
            "extension": self.extension,
        }

    def __repr__(self):
        return f"<FileRecord path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    A set of files considered duplicates under the active scan mode.
    All files share `size`; in strict mode they also share `digest`.
    """
    digest: str
    size: int
    files: List[FileRecord] = field(default_factory=list)

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def is_verified(self) -> bool:
        """False for size-only groups whose content was never hashed."""
        return not self.digest.startswith(SIZE_ONLY_DIGEST_PREFIX)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def add_file(self, file: FileRecord) -> None:
        if file.size != self.size:
            raise ValueError("Cannot add file with different size to a group.")
        self.files.append(file)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def largest_file(self) -> Optional[FileRecord]:
        """Member with the largest size; the first one wins on ties."""
        largest = None
        for file in self.files:
            if largest is None or file.size > largest.size:
                largest = file
        return largest

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self.digest,
            "size": self.size,
            "files": [f.to_dict(self.digest) for f in self.files],
        }

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


@dataclass
class DeleteOutcome:
    """Result of one deletion request. Partial success is a normal outcome."""
    deleted: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deleted": list(self.deleted),
            "failed": [{"path": p, "error": e} for p, e in self.failed.items()],
        }


@dataclass
class PreviewResult:
    kind: PreviewKind
    payload: str
    path: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "preview_type": self.kind.value,
            "content": self.payload,
            "file_path": self.path,
        }


class ScanStats:
    """
    Statistics collected during one scan.
    """
    def __init__(self):
        self.files_found: int = 0
        self.entries_skipped: int = 0
        self.files_hashed: int = 0
        self.hash_failures: int = 0
        self.bytes_hashed: int = 0
        self.groups_found: int = 0
        self.cancelled: bool = False
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

        for listener in self._listeners:
            try:
                listener(stage_name, self.stage_stats[stage_name])
            except Exception:
                logger.exception("Error in stats listener")

    def summary(self) -> str:
        lines = [
            "Scan Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files found: {self.files_found} (skipped entries: {self.entries_skipped})",
            f"Files hashed: {self.files_hashed} "
            f"({ConvertUtils.bytes_to_human(self.bytes_hashed)}, failures: {self.hash_failures})",
            "",
            "Stage: GROUPS / FILES / TIME",
        ]
        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['groups']} / {data['files']} / {data['time']:.3f}s")
        if self.cancelled:
            lines.append("Scan was cancelled.")
        return "\n".join(lines)


"""
Scan configuration with built-in validation.
Interface-agnostic: shared by the GUI workers, the CLI and the command layer.
"""

DEFAULT_CHUNK_SIZE = 64 * 1024


def _default_workers() -> int:
    return os.cpu_count() or 4


@dataclass
class ScanParams:
    """Parameters for one scan with validation."""
    root_dir: str
    mode: ScanMode = ScanMode.STRICT
    min_size_bytes: int = 0
    excluded_dirs: List[str] = field(default_factory=list)
    max_workers: int = field(default_factory=_default_workers)
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.chunk_size < 1:
            raise ValueError("Chunk size must be positive")

        self.mode = ScanMode.parse(self.mode)
        self.excluded_dirs = [str(Path(d).resolve()) for d in self.excluded_dirs if d]

    @staticmethod
    def from_human_readable(
            root_dir: str,
            mode: Union[ScanMode, str] = ScanMode.STRICT,
            min_size_str: str = "0",
            excluded_dirs: Optional[List[str]] = None,
            max_workers: Optional[int] = None,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing or GUI input conversion.
        """
        return ScanParams(
            root_dir=root_dir,
            mode=ScanMode.parse(mode),
            min_size_bytes=ConvertUtils.human_to_bytes(min_size_str),
            excluded_dirs=excluded_dirs or [],
            max_workers=max_workers or _default_workers(),
        )
