"""
Event endpoints for API v1.

Reads are public.  Creating an event requires a bearer token and the
authenticated user becomes the owner.  Updating or deleting an event
requires the caller to be its owner; the handler first loads the
event (404 if absent), then applies the ownership check (403), and
only then touches the store.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Path, status

from event_hub_api.app.core.db import MAX_ROW_ID
from event_hub_api.app.core.dependencies import get_current_subject, get_event_service
from event_hub_api.app.core.errors import NotFound, ValidationError
from event_hub_api.app.core.ownership import ensure_can_mutate
from event_hub_api.app.core.security import AuthenticatedSubject
from event_hub_api.app.schemas.event import (
    EVENT_FIELD_ALIASES,
    REQUIRED_FIELDS_MESSAGE,
    EventInput,
    EventRead,
    normalize_event_fields,
)
from event_hub_api.app.services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter()

EVENT_NOT_FOUND = "Event not found"


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: Dict[str, Any] = Body(..., examples=[{"name": "Meetup", "description": "Team sync session", "location": "HQ", "dateTime": "2025-01-01T10:00:00Z"}]),
    subject: AuthenticatedSubject = Depends(get_current_subject),
    events: EventService = Depends(get_event_service),
) -> EventRead:
    """Create a new event owned by the authenticated user.

    Accepts camelCase or PascalCase keys (``name``/``Name``, and
    ``dateTime``/``DateTime``/``date``/``Date`` for the date).  Any
    owner id supplied by the client is ignored.
    """
    fields = normalize_event_fields(payload)
    if any(field not in fields for field in EVENT_FIELD_ALIASES):
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    event = await events.insert(subject.user_id, EventInput(**fields))
    logger.info("User %s created event %s", subject.user_id, event.id)
    return event


@router.get("", response_model=List[EventRead])
async def list_events(events: EventService = Depends(get_event_service)) -> List[EventRead]:
    """Return all events, latest first.  Always a JSON array, possibly empty."""
    return await events.list_all()


@router.get("/{event_id}", response_model=EventRead)
async def get_event(
    event_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the event"),
    events: EventService = Depends(get_event_service),
) -> EventRead:
    event = await events.get(event_id)
    if event is None:
        raise NotFound(EVENT_NOT_FOUND)
    return event


@router.put("/{event_id}", response_model=EventRead)
@router.patch("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the event"),
    payload: Dict[str, Any] = Body(...),
    subject: AuthenticatedSubject = Depends(get_current_subject),
    events: EventService = Depends(get_event_service),
) -> EventRead:
    """Update an event owned by the caller.

    Partial updates are supported on both ``PUT`` and ``PATCH``: fields
    missing from the body (or given as empty strings) keep their stored
    values.
    """
    existing = await events.get(event_id)
    if existing is None:
        raise NotFound(EVENT_NOT_FOUND)
    ensure_can_mutate(subject.user_id, existing.owner_id, "update")

    fields = normalize_event_fields(payload)
    if not fields:
        return existing
    updated = await events.update(event_id, fields)
    if updated is None:
        raise NotFound(EVENT_NOT_FOUND)
    logger.info("User %s updated event %s (%s)", subject.user_id, event_id, ", ".join(sorted(fields)))
    return updated


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the event"),
    subject: AuthenticatedSubject = Depends(get_current_subject),
    events: EventService = Depends(get_event_service),
) -> None:
    """Delete an event owned by the caller, together with its attendee list."""
    existing = await events.get(event_id)
    if existing is None:
        raise NotFound(EVENT_NOT_FOUND)
    ensure_can_mutate(subject.user_id, existing.owner_id, "delete")
    await events.delete(event_id)
    logger.info("User %s deleted event %s", subject.user_id, event_id)
    return None
