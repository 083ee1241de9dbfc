"""
User models for LINE login.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class UserLogin(BaseModel):
    """Login / register payload sent by the LIFF client."""

    line_user_id: Optional[str] = Field(
        None,
        max_length=255,
        validation_alias=AliasChoices("line_user_id", "external_id"),
        description="LINE user id (external identity)",
    )
    display_name: Optional[str] = Field(None, max_length=255)
    picture_url: Optional[str] = None


class User(BaseModel):
    """User stored in the database."""

    id: int
    line_user_id: str
    display_name: Optional[str] = None
    picture_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
