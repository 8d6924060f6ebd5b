"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping by size and by content hashes.
Hash-based grouping fans the reads out over a caller-owned executor and
collects the results in the calling thread only.
"""

import logging
from collections import defaultdict
from concurrent.futures import Executor, as_completed
from typing import List, Dict, Tuple, Any, Callable, Optional

from clonesweep.core.models import FileRecord, ScanStats
from clonesweep.core.hasher import Sha256HasherImpl, XXHashFrontHasherImpl
from clonesweep.core.interfaces import DigestHasher, FrontHasher, StoppedFlag, ProgressCallback

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 100


class FileGrouperImpl:
    """
    Groups FileRecords by size (no I/O) or by hash (parallel I/O).
    Uses injected hashers for flexibility and testability.
    Every method returns only keys that have 2+ files.
    """

    def __init__(self, digest_hasher: DigestHasher = None, front_hasher: FrontHasher = None):
        self.digest_hasher = digest_hasher or Sha256HasherImpl()
        self.front_hasher = front_hasher or XXHashFrontHasherImpl()

    def group_by_size(self, records: List[FileRecord]) -> Dict[int, List[FileRecord]]:
        """Groups files by their size."""
        return self._group_by(records, lambda r: r.size)

    def group_by_front_hash(
        self,
        records: List[FileRecord],
        executor: Executor,
        stopped_flag: StoppedFlag = None,
        progress_callback: ProgressCallback = None,
        stats: Optional[ScanStats] = None
    ) -> Dict[Tuple[int, bytes], List[FileRecord]]:
        """Groups files by (size, xxHash64 of the first chunk)."""
        return self._group_by_parallel(
            records,
            lambda r: (r.size, self.front_hasher.compute_front_hash(r)),
            executor,
            stage_name="Front-chunk Hash",
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
            stats=stats,
        )

    def group_by_digest(
        self,
        records: List[FileRecord],
        executor: Executor,
        stopped_flag: StoppedFlag = None,
        progress_callback: ProgressCallback = None,
        stats: Optional[ScanStats] = None
    ) -> Dict[Tuple[int, str], List[FileRecord]]:
        """Groups files by (size, SHA-256 of the full content)."""
        return self._group_by_parallel(
            records,
            lambda r: (r.size, self.digest_hasher.compute_digest(r)),
            executor,
            stage_name="SHA-256 Hash",
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
            stats=stats,
            full_read=True,
        )

    @staticmethod
    def _group_by(records: List[FileRecord], key_func: Callable[[FileRecord], Any]) -> Dict[Any, List[FileRecord]]:
        """
        Helper method to group files by any cheap computed key.
        Args:
            records: Files to group
            key_func: Function that computes a hashable key from a FileRecord
        Returns:
            Dict[key, List[FileRecord]] without single-file keys
        """
        groups = defaultdict(list)
        for record in records:
            groups[key_func(record)].append(record)
        return {key: group for key, group in groups.items() if len(group) >= 2}

    @staticmethod
    def _group_by_parallel(
        records: List[FileRecord],
        key_func: Callable[[FileRecord], Any],
        executor: Executor,
        stage_name: str,
        stopped_flag: StoppedFlag = None,
        progress_callback: ProgressCallback = None,
        stats: Optional[ScanStats] = None,
        full_read: bool = False
    ) -> Dict[Any, List[FileRecord]]:
        """
        Computes key_func for every record on the executor and groups the results.

        A record whose key cannot be computed (OSError, including HashingError)
        is dropped; the rest of its group is unaffected. Members are appended in
        completion order. Returns {} once stopped_flag turns True.
        """
        def task(record: FileRecord):
            # Queued tasks must not start reading after cancellation
            if stopped_flag and stopped_flag():
                return None
            return key_func(record)

        groups = defaultdict(list)
        futures = {executor.submit(task, record): record for record in records}
        total = len(futures)
        done = 0
        failures = 0
        cancelled = False

        try:
            for future in as_completed(futures):
                if stopped_flag and stopped_flag():
                    cancelled = True
                    break

                record = futures[future]
                done += 1
                try:
                    key = future.result()
                except OSError as e:
                    failures += 1
                    logger.debug(f"Dropping {record.path}: {e}")
                    continue

                if key is not None:
                    groups[key].append(record)
                    if stats is not None and full_read:
                        stats.files_hashed += 1
                        stats.bytes_hashed += record.size

                if progress_callback and (done % PROGRESS_INTERVAL == 0 or done == total):
                    progress_callback(stage_name, done, total)
        finally:
            if cancelled:
                for future in futures:
                    future.cancel()

        if stats is not None:
            stats.hash_failures += failures
        if failures:
            logger.info(f"{stage_name}: skipped {failures} files due to read errors")
        if cancelled:
            logger.debug(f"{stage_name}: cancelled after {done}/{total} files")
            return {}

        return {key: group for key, group in groups.items() if len(group) >= 2}
