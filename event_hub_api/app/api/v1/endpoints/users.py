"""
User endpoints for API v1.

Users are provisioned outside the HTTP API, so only read access is
exposed here.  The stored password hash is never part of a response.
"""

from fastapi import APIRouter, Depends, Path

from event_hub_api.app.core.db import MAX_ROW_ID
from event_hub_api.app.core.dependencies import get_current_subject, get_user_service
from event_hub_api.app.core.errors import NotFound
from event_hub_api.app.core.security import AuthenticatedSubject
from event_hub_api.app.schemas.user import UserRead
from event_hub_api.app.services.user_service import UserService

router = APIRouter()


@router.get("/me", response_model=UserRead)
async def read_current_user(subject: AuthenticatedSubject = Depends(get_current_subject)) -> UserRead:
    """Return the user the bearer token was issued to."""
    return subject.user


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the user"),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    user = await users.get(user_id)
    if user is None:
        raise NotFound("User not found")
    return user
