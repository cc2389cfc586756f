# event_registration/api/v1/endpoints/attendees.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.constants.statuses import ContactStatus
from event_registration.core.email import ResendEmailTransport
from event_registration.crud import crud_email_template
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.attendee import (
    AttendeeGroups,
    DispatchResult,
    SendEmailRequest,
)
from event_registration.schemas.token import TokenPayload
from event_registration.services import attendee_query, email_dispatcher

router = APIRouter(tags=["Attendees"])
logger = logging.getLogger(__name__)


@router.get("/events/{eventId}/attendees", response_model=AttendeeGroups)
def list_attendees(
    search: Optional[str] = None,
    category: Optional[str] = None,
    status_filter: Optional[ContactStatus] = Query(None, alias="status"),
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Contacts grouped by category, with status counts over the filtered set
    and the event's email templates for the send dialog.
    """
    try:
        grouped = attendee_query.list_grouped(
            db,
            event_id=event.id,
            search=search,
            category=category,
            status=status_filter.value if status_filter else None,
        )
        templates = crud_email_template.email_template.get_multi_by_event(
            db, event_id=event.id
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch attendees for event {event.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error"
        )
    return {"event": event, "templates": templates, **grouped}


@router.post("/events/{eventId}/attendees/send-email", response_model=DispatchResult)
def send_email_to_attendees(
    send_in: SendEmailRequest,
    eventId: str,
    db: Session = Depends(get_db),
    transport: ResendEmailTransport = Depends(deps.get_email_transport),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Send a template to the selected contacts. A campaign is recorded for
    the send and every recipient gets an email log entry.
    """
    return email_dispatcher.send_bulk(
        db,
        transport,
        event_id=eventId,
        contact_ids=send_in.contact_ids,
        template_id=send_in.template_id,
    )
