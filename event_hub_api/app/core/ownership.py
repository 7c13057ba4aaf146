"""
Ownership checks for event mutations.

An event may only be updated or deleted by the user recorded as its
owner.  Handlers load the event first (so a missing event is reported
as 404) and then call ``ensure_can_mutate`` before touching the store.
"""

from .errors import Forbidden


def can_mutate(subject_id: int, owner_id: int) -> bool:
    """Return ``True`` when ``subject_id`` owns the resource."""
    return subject_id == owner_id


def ensure_can_mutate(subject_id: int, owner_id: int, action: str = "modify") -> None:
    """Raise ``Forbidden`` unless ``subject_id`` owns the resource."""
    if not can_mutate(subject_id, owner_id):
        raise Forbidden(f"You can only {action} your own events")
