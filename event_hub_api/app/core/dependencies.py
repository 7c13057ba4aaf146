"""
FastAPI dependencies for injecting configuration, stores and auth.

``create_app`` places the ``Settings`` and ``Database`` objects on
``app.state``; the providers below read them from the current request
so nothing in the request path depends on module‑level state.
"""

import logging

from fastapi import Depends, Request

from .config import Settings
from .db import Database
from .errors import Unauthorized
from .security import AuthenticatedSubject, TokenVerifier
from ..services.attendee_service import AttendeeService
from ..services.event_service import EventService
from ..services.user_service import UserService

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_user_service(db: Database = Depends(get_database)) -> UserService:
    return UserService(db)


def get_event_service(db: Database = Depends(get_database)) -> EventService:
    return EventService(db)


def get_attendee_service(db: Database = Depends(get_database)) -> AttendeeService:
    return AttendeeService(db)


def get_token_verifier(
    settings: Settings = Depends(get_settings),
    users: UserService = Depends(get_user_service),
) -> TokenVerifier:
    return TokenVerifier(settings.secret_key, settings.algorithm, users)


async def get_current_subject(
    request: Request,
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedSubject:
    """Authenticate the request from its ``Authorization`` header.

    On success the subject id and user record are also attached to
    ``request.state`` for anything further down the request path.
    Failures propagate as ``Unauthorized`` subclasses (HTTP 401).
    """
    try:
        subject = await verifier.verify(request.headers.get("Authorization"))
    except Unauthorized as exc:
        logger.info("Rejected credentials on %s %s: %s", request.method, request.url.path, exc)
        raise
    request.state.subject_id = subject.user_id
    request.state.user = subject.user
    return subject
