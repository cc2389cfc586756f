# event_registration/api/v1/endpoints/events.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.crud import crud_event
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.event import (
    Event,
    EventCreate,
    EventUpdate,
    EventWithCounts,
)
from event_registration.schemas.token import TokenPayload

router = APIRouter(tags=["Events"])


@router.post("/events", response_model=Event, status_code=status.HTTP_201_CREATED)
def create_event(
    event_in: EventCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Create a new event. The slug is derived from the name and made unique
    with a numeric suffix.
    """
    return crud_event.event.create_with_slug(db, obj_in=event_in)


@router.get("/events", response_model=List[EventWithCounts])
def list_events(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """List all events, newest first, with contact and registration counts."""
    return crud_event.event.get_multi_with_counts(db)


@router.get("/events/{eventId}", response_model=EventWithCounts)
def get_event(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    event = crud_event.event.get_with_counts(db, id=eventId)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return event


@router.patch("/events/{eventId}", response_model=Event)
def update_event(
    event_in: EventUpdate,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Update an event. `categories` replaces the whole ordered list.
    """
    if (
        event_in.start_date
        and event_in.end_date
        and event_in.end_date < event_in.start_date
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )
    return crud_event.event.update(db, db_obj=event, obj_in=event_in)


@router.delete("/events/{eventId}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(
    eventId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Delete an event with all its contacts, registrations, templates and campaigns."""
    deleted = crud_event.event.remove(db, id=eventId)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
