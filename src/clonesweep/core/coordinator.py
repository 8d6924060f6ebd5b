"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/coordinator.py
Runs one scan end-to-end: walk → size buckets → (strict) front hash → SHA-256.

One scan at a time per coordinator. A second scan while one is running is
rejected with ScanBusyError; it never supersedes the running one.
Cancellation discards partial results: a cancelled scan returns [].
"""

import enum
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Callable, Union

from clonesweep.core.models import (
    DuplicateGroup, FileRecord, ScanMode, ScanParams, ScanStats
)
from clonesweep.core.errors import ScanBusyError
from clonesweep.core.walker import FileWalkerImpl
from clonesweep.core.grouper import FileGrouperImpl
from clonesweep.core.stages import SizeStage, FrontHashStage, DigestStage
from clonesweep.core.interfaces import FileWalker, ProgressCallback

logger = logging.getLogger(__name__)


class ScanState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


def _default_walker_factory(params: ScanParams) -> FileWalker:
    return FileWalkerImpl(
        root_dir=params.root_dir,
        min_size=params.min_size_bytes,
        excluded_dirs=params.excluded_dirs
    )


class ScanCoordinator:
    """
    Orchestrates the scan workflow:
    1. Validate the root directory
    2. Walk the tree to completion
    3. Bucket by size
    4. In strict mode, hash candidates on a bounded thread pool

    Usage:
        coordinator = ScanCoordinator()
        groups = coordinator.scan("/data/photos", ScanMode.STRICT)

        # From another thread:
        coordinator.cancel()
    """

    def __init__(
        self,
        walker_factory: Callable[[ScanParams], FileWalker] = _default_walker_factory,
        grouper: Optional[FileGrouperImpl] = None
    ):
        self._walker_factory = walker_factory
        self._grouper = grouper
        self._state = ScanState.IDLE
        self._state_lock = threading.Lock()
        self._cancel_event = threading.Event()
        self._stats = ScanStats()

    @property
    def state(self) -> ScanState:
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state is ScanState.RUNNING

    @property
    def stats(self) -> ScanStats:
        """Statistics of the current or most recent scan."""
        return self._stats

    def cancel(self) -> None:
        """Requests cancellation of the running scan. No-op when idle."""
        with self._state_lock:
            if self._state is ScanState.RUNNING:
                logger.info("Scan cancellation requested")
                self._cancel_event.set()

    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def scan(
        self,
        root_dir: str,
        mode: Union[ScanMode, str] = ScanMode.STRICT,
        progress_callback: ProgressCallback = None,
        **options
    ) -> List[DuplicateGroup]:
        """
        Scan `root_dir` for duplicates.

        Args:
            root_dir: Directory to scan
            mode: ScanMode or its string value ("strict" / "size_only")
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            **options: Any other ScanParams field (min_size_bytes, excluded_dirs, ...)

        Raises:
            InvalidRootError: root is missing, not a directory or unreadable
            ScanBusyError: another scan is running on this coordinator
            ValueError: invalid mode or options
        """
        params = ScanParams(root_dir=root_dir, mode=mode, **options)
        return self.run(params, progress_callback=progress_callback)

    def run(self, params: ScanParams, progress_callback: ProgressCallback = None) -> List[DuplicateGroup]:
        """Execute a scan with validated parameters. See scan()."""
        self._acquire()
        try:
            return self._run(params, progress_callback)
        finally:
            self._release()

    def _acquire(self) -> None:
        with self._state_lock:
            if self._state is ScanState.RUNNING:
                raise ScanBusyError("A scan is already running")
            self._state = ScanState.RUNNING
            self._cancel_event.clear()
            self._stats = ScanStats()

    def _release(self) -> None:
        with self._state_lock:
            self._state = ScanState.IDLE

    def _run(self, params: ScanParams, progress_callback: ProgressCallback) -> List[DuplicateGroup]:
        stats = self._stats
        start = time.time()
        walker = self._walker_factory(params)
        walker.validate_root()

        logger.info(f"Scanning {params.root_dir} (mode: {params.mode.value}, workers: {params.max_workers})")

        records: List[FileRecord] = list(
            walker.walk(stopped_flag=self.is_cancelled, progress_callback=progress_callback)
        )
        stats.files_found = len(records)
        stats.entries_skipped = walker.skipped

        if self.is_cancelled():
            return self._cancelled(stats, start)

        grouper = self._grouper or FileGrouperImpl()
        groups = SizeStage(grouper).process(
            records, stopped_flag=self.is_cancelled,
            progress_callback=progress_callback, stats=stats
        )

        if params.mode is ScanMode.STRICT and groups:
            with ThreadPoolExecutor(max_workers=params.max_workers,
                                    thread_name_prefix="clonesweep-hash") as executor:
                try:
                    for stage in (FrontHashStage(grouper), DigestStage(grouper)):
                        groups = stage.process(
                            groups, executor, stopped_flag=self.is_cancelled,
                            progress_callback=progress_callback, stats=stats
                        )
                        if self.is_cancelled():
                            break
                except BaseException:
                    # Queued tasks must return without reading before the pool drains
                    self._cancel_event.set()
                    raise

        if self.is_cancelled():
            return self._cancelled(stats, start)

        groups.sort(key=lambda g: (-g.size, g.digest))
        stats.groups_found = len(groups)
        stats.total_time = time.time() - start
        logger.info(
            f"Scan finished: {len(groups)} duplicate groups among {stats.files_found} files "
            f"in {stats.total_time:.2f}s"
        )
        return groups

    @staticmethod
    def _cancelled(stats: ScanStats, start: float) -> List[DuplicateGroup]:
        stats.cancelled = True
        stats.total_time = time.time() - start
        logger.info("Scan cancelled; partial results discarded")
        return []
