"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the scan engine.
These protocols enforce structural typing using Python's `typing.Protocol` so that
hashers and walkers can be swapped (e.g. by test doubles) without touching the pipeline.

Key Components:
---------------
- DigestHasher: full-content cryptographic digest of a file.
- FrontHasher: cheap hash of a file's first chunk, used as a prefilter.
- FileWalker: enumerates regular files under a root directory.
"""

from typing import Protocol, Iterator, Optional, Callable
from clonesweep.core.models import FileRecord


StoppedFlag = Optional[Callable[[], bool]]
ProgressCallback = Optional[Callable[[str, int, object], None]]


class DigestHasher(Protocol):
    """Interface for hashing a file's full content."""
    def compute_digest(self, record: FileRecord) -> str: ...


class FrontHasher(Protocol):
    """Interface for hashing the first chunk of a file."""
    chunk_size: int

    def compute_front_hash(self, record: FileRecord) -> bytes: ...


class FileWalker(Protocol):
    """
    Interface for enumerating files under a root directory.

    Attributes:
        skipped: number of entries that could not be read during the last walk.
    """
    skipped: int

    def validate_root(self) -> None:
        """Raises InvalidRootError if the root cannot be scanned."""
        ...

    def walk(
        self,
        stopped_flag: StoppedFlag = None,
        progress_callback: ProgressCallback = None
    ) -> Iterator[FileRecord]:
        """
        Lazily yields one FileRecord per regular file.

        Args:
            stopped_flag: Function that returns True if the walk should stop.
            progress_callback: Optional callback for reporting progress (stage, current, total).
        """
        ...
