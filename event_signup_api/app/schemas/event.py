"""
Pydantic models for event data.

``EventBase`` holds the fields a client may send; ``EventCreate`` and
``EventUpdate`` are the request bodies and ``EventRead`` is returned to
clients.  JSON uses camelCase keys (``dateTime``, ``userId``).  The
owning account is never read from a request body: any ``userId`` a
client sends is ignored and the authenticated identity is used instead.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EventBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, examples=["Python meetup"])
    description: str = Field(..., min_length=1, examples=["Monthly talks and pizza"])
    location: str = Field(..., min_length=1, examples=["Berlin"])
    date_time: datetime = Field(..., alias="dateTime", examples=["2025-01-01T18:00:00Z"])


class EventCreate(EventBase):
    """Schema for creating an event."""
    pass


class EventUpdate(EventBase):
    """Schema for updating an event.

    Name, description, location and date/time are replaced as a whole;
    the owner cannot be changed.
    """
    pass


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    user_id: int | None = Field(None, alias="userId")


class EventCreated(BaseModel):
    message: str
    event: EventRead
