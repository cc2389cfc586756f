# event_registration/services/registration_service.py
"""
Public self-service registration.

An invite token identifies the invited contact; without one (or with an
unknown one) the contact is looked up by email, and a walk-in creates a
new contact. Registering twice is a conflict that hands back the original
confirmation code.
"""
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from event_registration.constants.statuses import ContactStatus
from event_registration.crud import contact as crud_contact
from event_registration.crud import event as crud_event
from event_registration.crud import registration as crud_registration
from event_registration.models.contact import Contact
from event_registration.models.event import Event
from event_registration.schemas.contact import ContactCreate
from event_registration.schemas.registration import PublicRegistrationCreate
from event_registration.utils.codes import generate_invite_token

logger = logging.getLogger(__name__)


def get_active_event(db: Session, *, slug: str) -> Event:
    event = crud_event.get_by_slug(db, slug=slug)
    if not event or not event.is_active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found or not active",
        )
    return event


def get_invite_prefill(db: Session, *, slug: str, token: Optional[str]) -> dict:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No token provided"
        )
    event = get_active_event(db, slug=slug)
    contact = crud_contact.get_by_invite_token(db, token=token)
    if not contact or contact.event_id != event.id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Invalid token"
        )
    return {"contact": contact, "event_name": event.name}


def _find_contact(
    db: Session, *, event: Event, email: str, token: Optional[str]
) -> Optional[Contact]:
    if token:
        contact = crud_contact.get_by_invite_token(db, token=token)
        if contact and contact.event_id == event.id:
            return contact
    return crud_contact.get_by_email(db, event_id=event.id, email=email)


def register(
    db: Session,
    *,
    slug: str,
    obj_in: PublicRegistrationCreate,
    token: Optional[str] = None,
) -> dict:
    event = get_active_event(db, slug=slug)
    email = obj_in.email.strip().lower()
    contact = _find_contact(db, event=event, email=email, token=token)

    if contact and contact.registration:
        if contact.status == ContactStatus.REGISTERED.value:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={
                    "message": "You are already registered for this event",
                    "confirmation_code": contact.registration.confirmation_code,
                },
            )
        # The organizer reset this contact's status; the old registration goes
        logger.info(f"Deleting stale registration {contact.registration.id} of contact {contact.id}")
        crud_registration.delete(db, db_obj=contact.registration)
        db.refresh(contact)

    fields = {
        "first_name": obj_in.first_name,
        "last_name": obj_in.last_name,
        "email": email,
    }
    try:
        if contact is None:
            contact = crud_contact.create(
                db,
                obj_in=ContactCreate(
                    **fields,
                    phone=obj_in.phone or None,
                    organization=obj_in.organization or None,
                    designation=obj_in.designation or None,
                ),
                event_id=event.id,
                invite_token=generate_invite_token(),
            )
        else:
            contact = crud_contact.update(
                db,
                db_obj=contact,
                obj_in={
                    **fields,
                    "phone": obj_in.phone or contact.phone,
                    "organization": obj_in.organization or contact.organization,
                    "designation": obj_in.designation or contact.designation,
                },
            )
        registration = crud_registration.create_for_contact(db, contact=contact)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A contact with this email is already registered for this event",
        )

    crud_contact.mark_status(db, contact=contact, status=ContactStatus.REGISTERED)
    logger.info(f"Registered {email} for event {event.id} ({registration.confirmation_code})")
    return {"confirmation_code": registration.confirmation_code}
