"""
Comments API endpoints.

Top-level comments, one level of replies and likes. The acting user is
identified by a LINE user id: in the JSON body for writes, in the
line_user_id header for listings and deletes.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from app.api.deps import CommentSvc, LineUserId
from app.models.comment import (
    CommentCreate,
    CommentSort,
    CommentUpdate,
    CommentView,
    LikeRequest,
    LikeState,
    MessageResponse,
)

router = APIRouter()


@router.get("", response_model=list[CommentView])
async def list_comments(
    service: CommentSvc,
    line_user_id: LineUserId,
    limit: int = Query(10, description="Maximum results"),
    offset: int = Query(0, description="Rows to skip"),
    sort: Optional[str] = Query(CommentSort.NEWEST.value, description="newest or top"),
):
    """List top-level comments, newest first or by like count."""
    return await service.list_top_level(
        line_user_id, limit=limit, offset=offset, sort=CommentSort.parse(sort)
    )


@router.post("", response_model=CommentView, status_code=status.HTTP_201_CREATED)
async def create_comment(payload: CommentCreate, service: CommentSvc):
    """Post a comment, or a reply when parent_id is given."""
    return await service.create(payload.line_user_id, payload.content, parent_id=payload.parent_id)


@router.put("/{comment_id}", response_model=CommentView)
async def update_comment(comment_id: int, payload: CommentUpdate, service: CommentSvc):
    """Edit a comment (author only)."""
    return await service.update(comment_id, payload.line_user_id, payload.content)


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(comment_id: int, service: CommentSvc, line_user_id: LineUserId):
    """Delete a comment (author only). Its replies and likes are removed too."""
    await service.delete(comment_id, line_user_id)
    return MessageResponse(message="Deleted")


@router.get("/{comment_id}/replies", response_model=list[CommentView])
async def list_replies(
    comment_id: int,
    service: CommentSvc,
    line_user_id: LineUserId,
    limit: int = Query(10, description="Maximum results"),
    offset: int = Query(0, description="Rows to skip"),
):
    """List replies of a comment, oldest first."""
    return await service.list_replies(comment_id, line_user_id, limit=limit, offset=offset)


@router.post("/{comment_id}/like", response_model=LikeState)
async def toggle_like(comment_id: int, payload: LikeRequest, service: CommentSvc):
    """Like or unlike a comment."""
    return await service.toggle_like(comment_id, payload.line_user_id)
