"""
Storage provider interface.

Abstracts where uploaded files are kept.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IStorageProvider(ABC):
    """Abstract interface for file storage."""

    @abstractmethod
    async def upload(
        self,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """Store a file and return its storage location."""
        pass

    @abstractmethod
    def get_public_url(self, path: str, base_url: str) -> str:
        """Public URL for a stored file, rooted at base_url."""
        pass
