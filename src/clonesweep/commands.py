"""
Boundary commands for any interactive frontend.
These three functions are the whole contract between the engine and a UI:
plain arguments in, plain JSON-ready dicts out. No Qt/PySide6 dependencies.
"""
from typing import Any, Dict, Iterable, List, Optional

from clonesweep.core.coordinator import ScanCoordinator
from clonesweep.services.file_service import DeletionService
from clonesweep.services.preview_service import PreviewService

_default_coordinator = ScanCoordinator()


def scan_folder(
        path: str,
        mode: str = "strict",
        coordinator: Optional[ScanCoordinator] = None,
        **options
) -> List[Dict[str, Any]]:
    """
    Scan a folder and return duplicate groups in wire shape:
    [{"hash", "size", "files": [{"path", "name", "size", "hash", "extension"}]}]

    Raises:
        ScanError: invalid/unreadable root, or a scan is already running
        ValueError: unknown mode
    """
    coordinator = coordinator or _default_coordinator
    groups = coordinator.scan(path, mode, **options)
    return [group.to_dict() for group in groups]


def get_file_preview(path: str, preview_service: Optional[PreviewService] = None) -> Dict[str, str]:
    """Returns {"preview_type", "content", "file_path"}; never raises for bad content."""
    return (preview_service or PreviewService()).get_preview(path).to_dict()


def delete_files(paths: Iterable[str], deletion_service: Optional[DeletionService] = None) -> Dict[str, Any]:
    """Moves files to trash; returns {"deleted": [...], "failed": [{"path", "error"}]}."""
    return (deletion_service or DeletionService()).delete(paths).to_dict()
