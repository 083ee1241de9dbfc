"""
User repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.models.user import User


class IUserRepository(ABC):
    """Abstract interface for user persistence."""

    @abstractmethod
    async def upsert(
        self,
        line_user_id: str,
        display_name: Optional[str],
        picture_url: Optional[str],
    ) -> User:
        """Insert a user, or refresh the profile of an existing one."""
        pass

    @abstractmethod
    async def get_by_line_user_id(self, line_user_id: str) -> Optional[User]:
        """Get a user by LINE user id."""
        pass
