"""API routers."""

from app.api import (
    comments,
    game,
    uploads,
    users,
)

__all__ = [
    "comments",
    "game",
    "uploads",
    "users",
]
