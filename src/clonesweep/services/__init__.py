from .duplicate_service import DuplicateService
from .file_service import FileService, DeletionService
from .preview_service import PreviewService

__all__ = ["DuplicateService", "FileService", "DeletionService", "PreviewService"]
