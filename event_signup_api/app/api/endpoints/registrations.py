"""
Registration endpoints.

Any authenticated account may register for an existing event and
cancel its own registration.  Cancelling when not registered succeeds.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from event_signup_api.app.api.deps import authenticate, get_db
from event_signup_api.app.core.db import Database
from event_signup_api.app.core.errors import AlreadyRegisteredError, EventApiError
from event_signup_api.app.schemas.common import MessageResponse
from event_signup_api.app.services.event_service import EventService
from event_signup_api.app.services.registration_service import RegistrationService


router = APIRouter()


@router.post("/events/{event_id}/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register_for_event(
    event_id: int,
    user_id: int = Depends(authenticate),
    db: Database = Depends(get_db),
) -> MessageResponse:
    try:
        EventService.get_event(db, event_id)
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not fetch the event.")
    try:
        RegistrationService.register(db, event_id, user_id)
    except AlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EventApiError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not register user for event.",
        )
    return MessageResponse(message="Registered for event.")


@router.delete("/events/{event_id}/register", response_model=MessageResponse)
def cancel_registration(
    event_id: int,
    user_id: int = Depends(authenticate),
    db: Database = Depends(get_db),
) -> MessageResponse:
    try:
        RegistrationService.cancel(db, event_id, user_id)
    except EventApiError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Could not cancel registration.")
    return MessageResponse(message="Registration cancelled.")
