"""
Pydantic models for user data.

Users are created outside the HTTP API (see ``create_user.py``).  The
stored password hash is deliberately absent from ``UserRead`` so it
can never be serialized into a response.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    email: str = Field(..., examples=["user@example.com"])
    name: str = Field(..., examples=["Jane Doe"])

    model_config = ConfigDict(from_attributes=True)
