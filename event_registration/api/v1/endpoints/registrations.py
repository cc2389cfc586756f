# event_registration/api/v1/endpoints/registrations.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.constants.statuses import RegistrationStatus
from event_registration.crud import crud_registration
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.registration import Registration, RegistrationStats
from event_registration.schemas.token import TokenPayload
from event_registration.services import contact_export, statistics

router = APIRouter(tags=["Registrations"])
logger = logging.getLogger(__name__)


@router.get("/events/{eventId}/registrations", response_model=List[Registration])
def list_registrations(
    search: Optional[str] = None,
    status_filter: Optional[RegistrationStatus] = Query(None, alias="status"),
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Registrations of an event, newest first. `search` matches the contact's
    first name, last name or email, case-insensitively.
    """
    registrations = crud_registration.registration.get_multi_by_event(
        db, event_id=event.id, status=status_filter.value if status_filter else None
    )
    if search:
        needle = search.lower()
        registrations = [
            r
            for r in registrations
            if needle in r.contact.first_name.lower()
            or needle in r.contact.last_name.lower()
            or needle in r.contact.email.lower()
        ]
    return registrations


@router.get("/events/{eventId}/registrations/export")
def export_registrations(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    csv_text = contact_export.export_registrations_csv(db, event_id=event.id)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="registrations-{event.id}.csv"'
        },
    )


@router.get("/events/{eventId}/registrations/stats", response_model=RegistrationStats)
def get_registration_stats(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    try:
        return statistics.get_registration_stats(db, event_id=event.id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch registration stats for event {event.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error"
        )
