"""
Attendee endpoints for API v1.

Adding or removing an attendee requires a bearer token but not event
ownership: any authenticated user may manage memberships.  Listings
are public.  Removal is idempotent; deleting a membership that does
not exist still answers 204.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status

from event_hub_api.app.core.db import MAX_ROW_ID
from event_hub_api.app.core.dependencies import (
    get_attendee_service,
    get_current_subject,
    get_event_service,
    get_user_service,
)
from event_hub_api.app.core.errors import DuplicateAttendee, NotFound
from event_hub_api.app.core.security import AuthenticatedSubject
from event_hub_api.app.schemas.attendee import AttendeeRead
from event_hub_api.app.schemas.event import EventRead
from event_hub_api.app.schemas.user import UserRead
from event_hub_api.app.services.attendee_service import AttendeeService
from event_hub_api.app.services.event_service import EventService
from event_hub_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

# Routes nested under /events/{event_id}/attendees.
router = APIRouter()

# Routes listing the events a user attends; mounted under /users and,
# for older clients, /attendees.
by_user_router = APIRouter()


@router.post(
    "/{event_id}/attendees/{user_id}",
    response_model=AttendeeRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_attendee(
    event_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the event"),
    user_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the user to add"),
    subject: AuthenticatedSubject = Depends(get_current_subject),
    events: EventService = Depends(get_event_service),
    users: UserService = Depends(get_user_service),
    attendees: AttendeeService = Depends(get_attendee_service),
) -> AttendeeRead:
    """Register a user as an attendee of an event.

    Returns 404 if either the event or the user does not exist and 409
    if the user already attends the event.
    """
    if await events.get(event_id) is None:
        raise NotFound("Event not found")
    if await users.get(user_id) is None:
        raise NotFound("User not found")
    if await attendees.get_by_event_and_user(event_id, user_id) is not None:
        raise DuplicateAttendee()
    attendee = await attendees.insert(event_id, user_id)
    logger.info("User %s added user %s to event %s", subject.user_id, user_id, event_id)
    return attendee


@router.get("/{event_id}/attendees", response_model=List[UserRead])
async def list_attendees(
    event_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the event"),
    attendees: AttendeeService = Depends(get_attendee_service),
) -> List[UserRead]:
    """List the users attending an event."""
    return await attendees.list_users_for_event(event_id)


@router.delete("/{event_id}/attendees/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_attendee(
    event_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the event"),
    user_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the user to remove"),
    subject: AuthenticatedSubject = Depends(get_current_subject),
    attendees: AttendeeService = Depends(get_attendee_service),
) -> None:
    removed = await attendees.delete(user_id, event_id)
    if removed:
        logger.info("User %s removed user %s from event %s", subject.user_id, user_id, event_id)
    return None


@by_user_router.get("/{user_id}/events", response_model=List[EventRead])
async def list_events_by_attendee(
    user_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the attending user"),
    attendees: AttendeeService = Depends(get_attendee_service),
) -> List[EventRead]:
    """List the events a user attends."""
    return await attendees.list_events_for_user(user_id)
