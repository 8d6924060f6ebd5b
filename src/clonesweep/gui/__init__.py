"""
Qt integration layer (requires the [gui] extra: pip install clonesweep[gui]).
"""
from .worker import ScanWorker, DeleteWorker, PreviewWorker, WorkerSignals

__all__ = ["ScanWorker", "DeleteWorker", "PreviewWorker", "WorkerSignals"]
