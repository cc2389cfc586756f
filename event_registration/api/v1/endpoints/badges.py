# event_registration/api/v1/endpoints/badges.py
from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.core.email import ResendEmailTransport
from event_registration.crud import crud_badge
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.badge import (
    BadgeGenerateRequest,
    BadgeGenerateResult,
    BadgeSendResult,
    BadgeTemplate,
    BadgeTemplateUpdate,
)
from event_registration.schemas.token import TokenPayload
from event_registration.services import badge_generator

router = APIRouter(tags=["Badges"])


@router.get(
    "/events/{eventId}/badges/template", response_model=Optional[BadgeTemplate]
)
def get_badge_template(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """The event's badge template, or null if none was saved or generated yet."""
    return crud_badge.badge_template.get_by_event(db, event_id=event.id)


@router.put("/events/{eventId}/badges/template", response_model=BadgeTemplate)
def save_badge_template(
    template_in: BadgeTemplateUpdate,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud_badge.badge_template.upsert(db, event_id=event.id, obj_in=template_in)


@router.post("/events/{eventId}/badges/generate", response_model=BadgeGenerateResult)
def generate_badges(
    generate_in: Optional[BadgeGenerateRequest] = Body(None),
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Generate or refresh badges for the confirmed registrations of the event,
    or only for `registration_ids` when given.
    """
    registration_ids = generate_in.registration_ids if generate_in else None
    return badge_generator.generate_badges(
        db, event_id=event.id, registration_ids=registration_ids
    )


@router.post("/events/{eventId}/badges/send", response_model=BadgeSendResult)
def send_badges(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    transport: ResendEmailTransport = Depends(deps.get_email_transport),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Email the badge link to every confirmed registration with a generated badge."""
    return badge_generator.send_badges(db, transport, event=event)
