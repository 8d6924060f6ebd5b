"""
Qt worker runnables — follows modern Qt pattern: QRunnable + QThreadPool.
Scans, deletions and previews run off the UI thread; results come back
through signals so the interactive surface never blocks.
"""
from typing import List, Optional

from PySide6.QtCore import QRunnable, QObject, Signal, QMutex, QMutexLocker

from clonesweep.core.coordinator import ScanCoordinator
from clonesweep.core.models import ScanParams
from clonesweep.services.file_service import DeletionService
from clonesweep.services.preview_service import PreviewService


class WorkerSignals(QObject):
    """Separate QObject to hold signals (QRunnable cannot emit signals directly)."""
    progress = Signal(str, int, object)  # stage, current, total
    finished = Signal(object)            # List[DuplicateGroup] | DeleteOutcome | PreviewResult
    error = Signal(str)


class ScanWorker(QRunnable):
    """
    Runs one scan in a thread pool thread.
    stop() cancels the scan; a stopped worker emits nothing further.
    """
    def __init__(self, params: ScanParams, coordinator: Optional[ScanCoordinator] = None):
        super().__init__()
        self.params = params
        self.coordinator = coordinator or ScanCoordinator()
        self.signals = WorkerSignals()
        self._stopped = False
        self._mutex = QMutex()
        self.setAutoDelete(True)

    def stop(self):
        """Sets the stopped flag and cancels the running scan."""
        with QMutexLocker(self._mutex):
            self._stopped = True
        self.coordinator.cancel()

    def is_stopped(self) -> bool:
        with QMutexLocker(self._mutex):
            return self._stopped

    def safe_progress_emit(self, stage: str, current: int, total=None):
        """Emits progress unless the worker was stopped."""
        with QMutexLocker(self._mutex):
            if not self._stopped:
                try:
                    self.signals.progress.emit(stage, current, total)
                except RuntimeError:
                    pass

    def run(self):
        """Main execution method. Runs in thread pool thread."""
        try:
            if self.is_stopped():
                return

            groups = self.coordinator.run(self.params, progress_callback=self.safe_progress_emit)

            if not self.is_stopped():
                self.signals.finished.emit(groups)
        except Exception as e:
            if not self.is_stopped():
                self.signals.error.emit(f"{type(e).__name__}: {str(e)}")


class DeleteWorker(QRunnable):
    """Moves files to trash off the UI thread; emits the DeleteOutcome."""
    def __init__(self, paths: List[str], deletion_service: Optional[DeletionService] = None):
        super().__init__()
        self.paths = list(paths)
        self.deletion_service = deletion_service or DeletionService()
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    def run(self):
        try:
            outcome = self.deletion_service.delete(self.paths)
            self.signals.finished.emit(outcome)
        except Exception as e:
            self.signals.error.emit(f"{type(e).__name__}: {str(e)}")


class PreviewWorker(QRunnable):
    """Loads one preview off the UI thread; emits the PreviewResult."""
    def __init__(self, file_path: str, preview_service: Optional[PreviewService] = None):
        super().__init__()
        self.file_path = file_path
        self.preview_service = preview_service or PreviewService()
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    def run(self):
        try:
            result = self.preview_service.get_preview(self.file_path)
            self.signals.finished.emit(result)
        except Exception as e:
            self.signals.error.emit(f"{type(e).__name__}: {str(e)}")
