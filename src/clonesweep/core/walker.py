"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/walker.py
Recursive enumeration of regular files under a root directory.
Features:
- Uses os.walk for fast traversal, never following symbolic links
- Prunes directories whose (device, inode) identity was already visited
- Skips OS trash folders and user-excluded directories
- Counts unreadable entries instead of aborting
- Yields FileRecord objects lazily
"""

import os
import sys
import stat
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

from clonesweep.core.models import FileRecord
from clonesweep.core.errors import InvalidRootError
from clonesweep.core.interfaces import StoppedFlag, ProgressCallback

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000
_TRASH_DIR_NAMES = {".Trash", "$Recycle.Bin", "Recycler"}


class FileWalkerImpl:
    """
    Walks a directory tree and produces one FileRecord per regular file.

    Attributes:
        root_dir: Root directory to scan
        min_size: Files smaller than this are ignored
        excluded_dirs: Directories that are never entered
        skipped: Number of entries that could not be read in the last walk
    """

    def __init__(
        self,
        root_dir: str,
        min_size: int = 0,
        excluded_dirs: Optional[List[str]] = None
    ):
        self.root_dir = root_dir
        self.min_size = min_size
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []
        self.skipped = 0

    def validate_root(self) -> None:
        root_path = Path(self.root_dir)
        if not root_path.exists():
            logger.error(f"Directory does not exist: {self.root_dir}")
            raise InvalidRootError(self.root_dir, "Directory does not exist")
        if not root_path.is_dir():
            logger.error(f"Not a directory: {self.root_dir}")
            raise InvalidRootError(self.root_dir, "Not a directory")
        if not os.access(root_path, os.R_OK | os.X_OK):
            logger.error(f"Directory is not readable: {self.root_dir}")
            raise InvalidRootError(self.root_dir, "Directory is not readable")

    def walk(
        self,
        stopped_flag: StoppedFlag = None,
        progress_callback: ProgressCallback = None
    ) -> Iterator[FileRecord]:
        self.validate_root()
        self.skipped = 0
        root = os.path.abspath(self.root_dir)
        visited: Set[Tuple[int, int]] = set()
        found = 0

        logger.debug(f"Walking directory: {root}")

        for current, dirs, files in os.walk(root, onerror=self._on_walk_error):
            if stopped_flag and stopped_flag():
                logger.debug("Walk interrupted by user")
                return

            identity = self._dir_identity(current)
            if identity is None or identity in visited:
                logger.debug(f"Skipping already visited or vanished directory: {current}")
                dirs[:] = []
                continue
            visited.add(identity)

            # Prune BEFORE os.walk descends into them
            dirs[:] = [d for d in dirs if self._prefilter_dir(os.path.join(current, d))]

            for filename in files:
                record = self._process_file(os.path.join(current, filename))
                if record is None:
                    continue
                found += 1
                if progress_callback and found % PROGRESS_INTERVAL == 0:
                    progress_callback("Scanning", found, None)
                yield record

        if progress_callback:
            progress_callback("Scanning", found, None)
        logger.debug(f"Walk finished: {found} files, {self.skipped} skipped entries")

    def _on_walk_error(self, error: OSError) -> None:
        self.skipped += 1
        logger.debug(f"Cannot list directory {error.filename}: {error}")

    def _dir_identity(self, path: str) -> Optional[Tuple[int, int]]:
        try:
            st = os.stat(path)
        except OSError as e:
            self.skipped += 1
            logger.debug(f"Cannot stat directory {path}: {e}")
            return None
        return st.st_dev, st.st_ino

    @staticmethod
    def _is_system_trash(path: str) -> bool:
        """True for OS trash/recycle bin folders on any platform."""
        name = os.path.basename(path)
        if name in _TRASH_DIR_NAMES or name.startswith(".Trash-"):
            return True
        if sys.platform not in ("win32", "darwin"):
            normalized = path.replace(os.sep, "/")
            return normalized.endswith("/.local/share/Trash")
        return False

    def _is_excluded_directory(self, path: str) -> bool:
        try:
            path_str = str(Path(path).resolve(strict=False))
        except (OSError, RuntimeError):
            return False
        for excluded in self.excluded_dirs:
            if path_str == excluded or path_str.startswith(excluded + os.sep):
                return True
        return False

    def _prefilter_dir(self, path: str) -> bool:
        """Decides whether os.walk may descend into `path`."""
        if os.path.islink(path):
            logger.debug(f"Skipping symbolic link to directory: {path}")
            return False

        if self._is_system_trash(path):
            logger.debug(f"Skipping system trash directory: {path}")
            return False

        if self.excluded_dirs and self._is_excluded_directory(path):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        return True

    def _process_file(self, path: str) -> Optional[FileRecord]:
        """Returns a FileRecord for a regular file, or None if it must be skipped."""
        try:
            st = os.lstat(path)
        except OSError as e:
            self.skipped += 1
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if stat.S_ISLNK(st.st_mode):
            if not os.path.exists(path):
                self.skipped += 1
                logger.debug(f"Skipping broken symbolic link: {path}")
            else:
                logger.debug(f"Skipping symbolic link: {path}")
            return None

        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        if st.st_size < self.min_size:
            return None

        return FileRecord.from_path(path, st.st_size)
