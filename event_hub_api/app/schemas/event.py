"""
Pydantic models and input normalization for event data.

``EventRead`` is the shape returned by the API.  Incoming event
payloads are free‑form JSON objects: clients written against earlier
versions of the API send PascalCase keys (``Name``, ``DateTime``) or
``date`` instead of ``dateTime``.  ``normalize_event_fields`` maps the
accepted spellings declared in ``EVENT_FIELD_ALIASES`` onto the
canonical fields before any validation takes place.
"""

from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Canonical field -> accepted input keys, in order of precedence.
EVENT_FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "name": ("name", "Name"),
    "description": ("description", "Description"),
    "location": ("location", "Location"),
    "date_time": ("dateTime", "DateTime", "date", "Date"),
}

REQUIRED_FIELDS_MESSAGE = "All fields (name, description, location, dateTime) are required"


def normalize_event_fields(payload: Mapping[str, Any]) -> Dict[str, str]:
    """Return the canonical event fields found in ``payload``.

    For each canonical field the first accepted key holding a non‑empty
    string wins; the value is stripped of surrounding whitespace.
    Fields with no usable value are left out of the result, as are keys
    that are not listed in ``EVENT_FIELD_ALIASES`` (``ownerId`` among
    them: the owner always comes from the authenticated user).
    """
    fields: Dict[str, str] = {}
    for canonical, keys in EVENT_FIELD_ALIASES.items():
        for key in keys:
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                fields[canonical] = value.strip()
                break
    return fields


class EventInput(BaseModel):
    """A complete, normalized set of event fields."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    date_time: str = Field(..., min_length=1)


class EventRead(BaseModel):
    """Schema for reading an event from the API."""

    id: int
    owner_id: int = Field(..., alias="ownerId")
    name: str = Field(..., examples=["Meetup"])
    description: str = Field(..., examples=["Team sync session"])
    date_time: str = Field(..., alias="dateTime", examples=["2025-01-01T10:00:00Z"])
    location: str = Field(..., examples=["HQ"])

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
