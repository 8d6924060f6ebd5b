"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/preview_service.py

Small, bounded previews of a single file for display next to a duplicate group:
- Raster images are shrunk with Pillow and returned as a PNG data URI
- SVG files are returned as-is (data URI) when small enough
- Text and source files return their first lines
- Everything else degrades to an "unsupported" result with a readable message

get_preview() never raises for unreadable or unsupported content.
"""

import base64
import io
import logging
import os

from PIL import Image, UnidentifiedImageError

from clonesweep.core.models import PreviewKind, PreviewResult

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "bmp", "webp", "ico"}
SVG_EXTENSIONS = {"svg"}
TEXT_EXTENSIONS = {
    "txt", "md", "rs", "js", "ts", "tsx", "jsx", "css", "html", "json", "toml",
    "yaml", "yml", "xml", "csv", "log", "py", "java", "c", "cpp", "h", "go",
    "rb", "php", "sh", "bat", "ps1",
}


class PreviewService:
    def __init__(self, max_dimension: int = 256, max_text_lines: int = 20, max_text_bytes: int = 64 * 1024):
        self.max_dimension = max_dimension
        self.max_text_lines = max_text_lines
        self.max_text_bytes = max_text_bytes

    def get_preview(self, file_path: str) -> PreviewResult:
        if not os.path.isfile(file_path):
            return self._unsupported(file_path, "File not found")

        extension = os.path.splitext(file_path)[1][1:].lower()
        try:
            if extension in IMAGE_EXTENSIONS:
                return self._image_preview(file_path)
            if extension in SVG_EXTENSIONS:
                return self._svg_preview(file_path)
            if extension in TEXT_EXTENSIONS:
                return self._text_preview(file_path)
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as e:
            logger.debug(f"Preview failed for {file_path}: {e}")
            return self._unsupported(file_path, f"Could not load preview: {e}")

        label = f".{extension}" if extension else "files without extension"
        return self._unsupported(file_path, f"Preview not available for {label}")

    def _image_preview(self, file_path: str) -> PreviewResult:
        with Image.open(file_path) as img:
            img.thumbnail((self.max_dimension, self.max_dimension))
            if img.mode not in ("RGB", "RGBA", "L", "LA", "P"):
                img = img.convert("RGBA")
            buffer = io.BytesIO()
            img.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return PreviewResult(PreviewKind.IMAGE, f"data:image/png;base64,{encoded}", file_path)

    def _svg_preview(self, file_path: str) -> PreviewResult:
        if os.path.getsize(file_path) > self.max_text_bytes:
            return self._unsupported(file_path, "SVG file is too large to preview")
        with open(file_path, "rb") as f:
            data = f.read(self.max_text_bytes)
        encoded = base64.b64encode(data).decode("ascii")
        return PreviewResult(PreviewKind.IMAGE, f"data:image/svg+xml;base64,{encoded}", file_path)

    def _text_preview(self, file_path: str) -> PreviewResult:
        with open(file_path, "rb") as f:
            data = f.read(self.max_text_bytes)
        text = data.decode("utf-8", errors="replace")
        lines = text.splitlines()[:self.max_text_lines]
        return PreviewResult(PreviewKind.TEXT, "\n".join(lines), file_path)

    @staticmethod
    def _unsupported(file_path: str, message: str) -> PreviewResult:
        return PreviewResult(PreviewKind.UNSUPPORTED, message, file_path)
