"""Pydantic model for event memberships."""

from pydantic import BaseModel, ConfigDict, Field


class AttendeeRead(BaseModel):
    id: int
    event_id: int = Field(..., alias="eventId")
    user_id: int = Field(..., alias="userId")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)
