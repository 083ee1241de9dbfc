"""
Unit tests for CommentService identity and validation rules.
"""

import pytest

from app.core.exceptions import AuthenticationError, ForbiddenError, NotFoundError, ValidationError
from app.models.comment import CommentSort
from app.services.comment_service import CommentService


@pytest.fixture
def service(user_repo, comment_repo, like_repo):
    return CommentService(user_repo, comment_repo, like_repo)


class TestIdentity:
    @pytest.mark.asyncio
    async def test_unknown_user_cannot_post(self, service):
        with pytest.raises(AuthenticationError):
            await service.create("U-stranger", "hi")

    @pytest.mark.asyncio
    async def test_missing_user_cannot_like(self, service, alice):
        comment = await service.create(alice.line_user_id, "hi")

        with pytest.raises(AuthenticationError):
            await service.toggle_like(comment.id, None)

    @pytest.mark.asyncio
    async def test_listing_with_unknown_header_is_rejected(self, service):
        with pytest.raises(AuthenticationError):
            await service.list_top_level("U-stranger")

    @pytest.mark.asyncio
    async def test_listing_without_header_is_anonymous(self, service, alice):
        await service.create(alice.line_user_id, "hi")

        [view] = await service.list_top_level(None)

        assert view.is_owner is False

    @pytest.mark.asyncio
    async def test_replies_with_unknown_header_are_anonymous(self, service, alice):
        parent = await service.create(alice.line_user_id, "parent")
        await service.create(alice.line_user_id, "reply", parent_id=parent.id)

        [reply] = await service.list_replies(parent.id, "U-stranger")

        assert reply.is_owner is False


class TestValidation:
    @pytest.mark.asyncio
    async def test_content_bounds(self, service, alice):
        ok = await service.create(alice.line_user_id, "a" * 100)
        assert len(ok.content) == 100

        with pytest.raises(ValidationError):
            await service.create(alice.line_user_id, "a" * 101)
        with pytest.raises(ValidationError):
            await service.create(alice.line_user_id, "")
        with pytest.raises(ValidationError):
            await service.update(ok.id, alice.line_user_id, "b" * 101)

    @pytest.mark.asyncio
    async def test_negative_pagination(self, service):
        with pytest.raises(ValidationError):
            await service.list_top_level(None, limit=-1)
        with pytest.raises(ValidationError):
            await service.list_top_level(None, offset=-5)

    @pytest.mark.asyncio
    async def test_replies_of_missing_parent(self, service):
        with pytest.raises(NotFoundError):
            await service.list_replies(9999, None)


class TestOwnership:
    @pytest.mark.asyncio
    async def test_only_author_edits_and_deletes(self, service, alice, bob):
        comment = await service.create(alice.line_user_id, "mine")

        with pytest.raises(ForbiddenError):
            await service.update(comment.id, bob.line_user_id, "theirs")
        with pytest.raises(ForbiddenError):
            await service.delete(comment.id, bob.line_user_id)

        edited = await service.update(comment.id, alice.line_user_id, "still mine")
        assert edited.is_edited is True
        await service.delete(comment.id, alice.line_user_id)
        assert await service.list_top_level(None, sort=CommentSort.TOP) == []
