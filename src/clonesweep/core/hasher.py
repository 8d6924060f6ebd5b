"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Streaming file hashers.

Sha256HasherImpl produces the digest that confirms duplicates.
XXHashFrontHasherImpl hashes only the first chunk and is used to prune
candidates before the full read.

Both read through a fixed-size buffer and verify the file still has the size
recorded by the walker. Every call owns its handle and hash object, so one
instance can be shared by all pool threads.
"""

import os
import hashlib
import logging

import xxhash

from clonesweep.core.models import FileRecord, DEFAULT_CHUNK_SIZE
from clonesweep.core.errors import HashingError, FileChangedError

logger = logging.getLogger(__name__)


class _StreamingHasherBase:
    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    @staticmethod
    def _check_size(record: FileRecord, fd: int) -> None:
        """Compares the open handle's size with the size seen at enumeration."""
        actual = os.fstat(fd).st_size
        if actual != record.size:
            logger.debug(f"Size of {record.path} changed since enumeration: {record.size} -> {actual}")
            raise FileChangedError(record.path, record.size, actual)


class Sha256HasherImpl(_StreamingHasherBase):
    """Computes the hex SHA-256 of a file's full content."""

    def compute_digest(self, record: FileRecord) -> str:
        hasher = hashlib.sha256()
        total = 0
        try:
            with open(record.path, "rb") as f:
                self._check_size(record, f.fileno())
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    hasher.update(chunk)
                    total += len(chunk)
        except HashingError:
            raise
        except OSError as e:
            raise HashingError(record.path, f"Cannot read file ({e.strerror or e})") from e

        if total != record.size:
            logger.debug(f"Short read on {record.path}: {total} of {record.size} bytes")
            raise FileChangedError(record.path, record.size, total)
        return hasher.hexdigest()


class XXHashFrontHasherImpl(_StreamingHasherBase):
    """Computes the xxHash64 of a file's first `chunk_size` bytes."""

    def compute_front_hash(self, record: FileRecord) -> bytes:
        expected = min(record.size, self.chunk_size)
        try:
            with open(record.path, "rb") as f:
                self._check_size(record, f.fileno())
                data = f.read(expected)
        except HashingError:
            raise
        except OSError as e:
            raise HashingError(record.path, f"Cannot read file ({e.strerror or e})") from e

        if len(data) != expected:
            logger.debug(f"Short read on {record.path}: {len(data)} of {expected} bytes")
            raise FileChangedError(record.path, record.size, len(data))
        return xxhash.xxh64(data).digest()
