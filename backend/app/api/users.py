"""
User login endpoint.

The LIFF client posts the LINE profile after login; the user row is created
on first sight and refreshed afterwards.
"""

from fastapi import APIRouter

from app.api.deps import UserRepo
from app.core.exceptions import ValidationError
from app.core.logger import setup_logger
from app.models.user import User, UserLogin

logger = setup_logger(__name__)

router = APIRouter()


@router.post("/login", response_model=User)
async def login(payload: UserLogin, user_repo: UserRepo):
    """Register or refresh a user by LINE user id."""
    if not payload.line_user_id:
        raise ValidationError("Missing line_user_id")

    user = await user_repo.upsert(
        payload.line_user_id,
        display_name=payload.display_name,
        picture_url=payload.picture_url,
    )
    logger.info(f"User {user.id} logged in")
    return user
