"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Safe, reversible deletion: files are moved to the system trash via send2trash,
never erased permanently.
"""
import os
import logging
from typing import Iterable

from send2trash import send2trash

from clonesweep.core.models import DeleteOutcome

logger = logging.getLogger(__name__)


class FileService:
    """
    Cross-platform trash operations.
    """

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a single file (or symbolic link) to the system trash."""
        # abspath("") would resolve to the working directory
        if not file_path or not file_path.strip():
            raise FileNotFoundError("File not found: empty path")

        path = os.path.abspath(file_path)

        if not os.path.lexists(path):
            raise FileNotFoundError(f"File not found: {path}")
        if not (os.path.isfile(path) or os.path.islink(path)):
            raise IsADirectoryError(f"Not a regular file: {path}")

        try:
            send2trash(path)
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e


class DeletionService:
    """
    Moves a batch of files to the trash, one by one.
    Each path succeeds or fails on its own; a partially successful batch is a
    normal outcome, and nothing is rolled back.
    """

    def __init__(self, file_service: FileService = None):
        self.file_service = file_service or FileService()

    def delete(self, paths: Iterable[str]) -> DeleteOutcome:
        outcome = DeleteOutcome()
        # Repeated paths are attempted once
        for path in dict.fromkeys(paths):
            try:
                self.file_service.move_to_trash(path)
            except FileNotFoundError:
                outcome.failed[path] = "File not found"
                logger.warning(f"Cannot delete {path}: file not found")
            except (RuntimeError, OSError) as e:
                outcome.failed[path] = str(e)
                logger.warning(f"Cannot delete {path}: {e}")
            else:
                outcome.deleted.append(path)
                logger.debug(f"Moved to trash: {path}")

        logger.info(f"Deletion finished: {len(outcome.deleted)} moved to trash, {len(outcome.failed)} failed")
        return outcome
