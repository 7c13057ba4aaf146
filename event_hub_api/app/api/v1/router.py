"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers (events, attendees,
users) under a unified prefix.  When new endpoints are added, update
this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import attendees, events, users

router = APIRouter()

router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(attendees.router, prefix="/events", tags=["attendees"])
router.include_router(attendees.by_user_router, prefix="/users", tags=["attendees"])
router.include_router(users.router, prefix="/users", tags=["users"])
# Older web clients request ``/attendees/{id}/events``; keep that
# path working alongside the canonical ``/users/{id}/events``.
router.include_router(
    attendees.by_user_router, prefix="/attendees", tags=["attendees"], include_in_schema=False
)
