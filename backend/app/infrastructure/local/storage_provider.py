"""
Local file system storage provider.
"""

from pathlib import Path
from typing import Optional
from urllib.parse import quote

from app.core.exceptions import InfrastructureError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.storage_provider import IStorageProvider

logger = setup_logger(__name__)

# Mount point of the upload directory (see main.create_app)
PUBLIC_PREFIX = "/uploads"


class LocalStorageProvider(IStorageProvider):
    """
    Local file system storage implementation.

    Stores uploaded files flat in a single directory which is also served
    as static content under /uploads.
    """

    def __init__(self, base_path: Optional[str] = None):
        """
        Initialize local storage provider.

        Args:
            base_path: Directory for uploaded files (default: ./uploads)
        """
        self.base_path = Path(base_path or "./uploads")
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def upload(
        self,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """Write a file into the upload directory and return its relative path."""
        file_path = self._resolve_path(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise InfrastructureError(f"Failed to upload file: {e}")

        logger.info(f"Stored upload {path} ({len(data)} bytes, {content_type or 'unknown type'})")
        return path

    def get_public_url(self, path: str, base_url: str) -> str:
        """URL under which the static mount serves the file."""
        return f"{base_url.rstrip('/')}{PUBLIC_PREFIX}/{quote(path)}"

    def _resolve_path(self, path: str) -> Path:
        """Resolve a relative path inside base_path, refusing to escape it."""
        base = self.base_path.resolve()
        file_path = (base / path).resolve()
        if base not in file_path.parents:
            raise ValidationError(f"Invalid file name: {path}")
        return file_path
