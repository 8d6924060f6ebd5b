"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Scan pipeline stages.

STAGES
------
SizeStage       : buckets records by size; O(n), no I/O. Used by both modes.
FrontHashStage  : strict mode; splits buckets by xxHash64 of the first chunk so
                  whole-file reads are skipped when heads already differ.
DigestStage     : strict mode; splits candidates by SHA-256 and produces the
                  final, content-verified groups.

STAGE CONTRACTS
---------------
Each stage implements `process()` which:
  • Accepts the candidate groups (or records) of the previous stage
  • Returns refined DuplicateGroups, each with 2+ members
  • Reports progress via callback (stage name, processed count, total count)
  • Returns [] when stopped_flag turns True
Hash stages receive the executor owned by the coordinator for this scan.
"""

import time
from concurrent.futures import Executor
from typing import List, Optional

from clonesweep.core.models import FileRecord, DuplicateGroup, ScanStats, Stage, size_only_digest
from clonesweep.core.grouper import FileGrouperImpl
from clonesweep.core.interfaces import StoppedFlag, ProgressCallback


class SizeStage:
    name = Stage.SIZE.value

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            records: List[FileRecord],
            stopped_flag: StoppedFlag = None,
            progress_callback: ProgressCallback = None,
            stats: Optional[ScanStats] = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Returns DuplicateGroups of 2+ files carrying the size-only sentinel digest.
        """
        if stopped_flag and stopped_flag():
            return []

        start = time.time()
        groups = [
            DuplicateGroup(digest=size_only_digest(size), size=size, files=files)
            for size, files in self.grouper.group_by_size(records).items()
        ]

        if progress_callback:
            progress_callback(self.name, len(records), len(records))
        if stats is not None:
            stats.update_stage(self.name, len(groups), len(records), time.time() - start)
        return groups


class _HashStageBase:
    name = ""

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            groups: List[DuplicateGroup],
            executor: Executor,
            stopped_flag: StoppedFlag = None,
            progress_callback: ProgressCallback = None,
            stats: Optional[ScanStats] = None
    ) -> List[DuplicateGroup]:
        if stopped_flag and stopped_flag():
            return []

        start = time.time()
        passthrough, to_hash = self._split(groups)
        records = [f for group in to_hash for f in group.files]
        refined = self._refine(records, executor, stopped_flag, progress_callback, stats)

        if stopped_flag and stopped_flag():
            return []

        result = passthrough + refined
        if stats is not None:
            stats.update_stage(self.name, len(result), len(records), time.time() - start)
        return result

    def _split(self, groups: List[DuplicateGroup]):
        """Returns (groups that skip this stage, groups to hash)."""
        return [], groups

    def _refine(self, records, executor, stopped_flag, progress_callback, stats) -> List[DuplicateGroup]:
        raise NotImplementedError


class FrontHashStage(_HashStageBase):
    name = Stage.FRONT.value

    def _split(self, groups: List[DuplicateGroup]):
        # Heads of files that fit in one chunk are the whole file; the digest stage reads them once anyway
        chunk_size = self.grouper.front_hasher.chunk_size
        small = [g for g in groups if g.size <= chunk_size]
        large = [g for g in groups if g.size > chunk_size]
        return small, large

    def _refine(self, records, executor, stopped_flag, progress_callback, stats) -> List[DuplicateGroup]:
        hash_groups = self.grouper.group_by_front_hash(
            records, executor, stopped_flag=stopped_flag,
            progress_callback=progress_callback, stats=stats
        )
        return [
            DuplicateGroup(digest=size_only_digest(size), size=size, files=files)
            for (size, _), files in hash_groups.items()
        ]


class DigestStage(_HashStageBase):
    name = Stage.DIGEST.value

    def _refine(self, records, executor, stopped_flag, progress_callback, stats) -> List[DuplicateGroup]:
        hash_groups = self.grouper.group_by_digest(
            records, executor, stopped_flag=stopped_flag,
            progress_callback=progress_callback, stats=stats
        )
        return [
            DuplicateGroup(digest=digest, size=size, files=files)
            for (size, digest), files in hash_groups.items()
        ]
