"""
Event endpoints.

Listing and reading events is public.  Creating, updating and deleting
require a valid token; update and delete are further restricted to the
account that created the event.  Failures are answered with short,
generic messages; details go to the log.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from event_signup_api.app.api.deps import authenticate, get_db
from event_signup_api.app.core.db import Database
from event_signup_api.app.core.errors import EventApiError, NotOwnerError
from event_signup_api.app.schemas.common import MessageResponse
from event_signup_api.app.schemas.event import EventCreate, EventCreated, EventRead, EventUpdate
from event_signup_api.app.services.event_service import EventService


public_router = APIRouter()
protected_router = APIRouter()


@public_router.get("/events", response_model=List[EventRead])
def list_events(db: Database = Depends(get_db)) -> List[EventRead]:
    """Return every event."""
    try:
        return EventService.list_events(db)
    except EventApiError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not fetch events. Try again later.",
        )


@public_router.get("/events/{event_id}", response_model=EventRead)
def get_event(event_id: int, db: Database = Depends(get_db)) -> EventRead:
    """Retrieve a single event by its id.

    A missing event and a failed query are both reported as 500.
    """
    try:
        return EventService.get_event(db, event_id)
    except EventApiError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not fetch event.",
        )


@protected_router.post("/events", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
def create_event(
    event: EventCreate,
    user_id: int = Depends(authenticate),
    db: Database = Depends(get_db),
) -> EventCreated:
    """Create an event owned by the authenticated account."""
    try:
        created = EventService.create_event(db, event, user_id)
    except EventApiError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create event. Try again later.",
        )
    return EventCreated(message="Event created", event=created)


@protected_router.put("/events/{event_id}", response_model=MessageResponse)
def update_event(
    event_id: int,
    updated: EventUpdate,
    user_id: int = Depends(authenticate),
    db: Database = Depends(get_db),
) -> MessageResponse:
    """Replace the details of an event owned by the caller.

    An event that cannot be fetched is answered with 400.
    """
    try:
        EventService.get_owned_event(db, event_id, user_id)
    except NotOwnerError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized to update event.")
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not fetch the event.")
    try:
        EventService.update_event(db, event_id, updated)
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not update event.")
    return MessageResponse(message="Event updated successfully!")


@protected_router.delete("/events/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    user_id: int = Depends(authenticate),
    db: Database = Depends(get_db),
) -> MessageResponse:
    """Delete an event owned by the caller, along with its registrations."""
    try:
        EventService.get_owned_event(db, event_id, user_id)
    except NotOwnerError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized to delete event.")
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not fetch the event.")
    try:
        EventService.delete_event(db, event_id)
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not delete the event.")
    return MessageResponse(message="Event deleted successfully!")
