"""
Comment model definitions.

Comments form a one-level thread: top-level comments have no parent,
replies point at the comment they answer.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

COMMENT_MAX_LENGTH = 100


class CommentSort(str, Enum):
    """Ordering for top-level comment listings."""

    NEWEST = "newest"
    TOP = "top"

    @classmethod
    def parse(cls, value: Optional[str]) -> "CommentSort":
        """Anything other than "top" falls back to newest first."""
        return cls.TOP if value == cls.TOP.value else cls.NEWEST


class CommentCreate(BaseModel):
    """Schema for posting a comment or a reply."""

    line_user_id: Optional[str] = None
    content: str = Field(..., min_length=1, max_length=COMMENT_MAX_LENGTH)
    parent_id: Optional[int] = None


class CommentUpdate(BaseModel):
    """Schema for editing a comment (by author)."""

    line_user_id: Optional[str] = None
    content: str = Field(..., min_length=1, max_length=COMMENT_MAX_LENGTH)


class LikeRequest(BaseModel):
    """Schema for toggling a like."""

    line_user_id: Optional[str] = None


class CommentView(BaseModel):
    """Comment joined with author info and viewer-relative flags."""

    id: int
    parent_id: Optional[int] = None
    content: str
    created_at: datetime
    updated_at: datetime
    display_name: Optional[str] = None
    picture_url: Optional[str] = None
    like_count: int = 0
    reply_count: int = 0
    is_liked: bool = False
    is_owner: bool = False
    is_edited: bool = False

    class Config:
        from_attributes = True


class LikeState(BaseModel):
    """Like state after a toggle."""

    is_liked: bool
    like_count: int


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
