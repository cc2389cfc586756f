# event_registration/crud/crud_event.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from event_registration.models.contact import Contact
from event_registration.models.email_campaign import EmailCampaign
from event_registration.models.email_template import EmailTemplate
from event_registration.models.event import Event
from event_registration.models.registration import Registration
from event_registration.schemas.event import EventCreate, EventUpdate
from event_registration.utils.slug import generate_slug


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    def create_with_slug(self, db: Session, *, obj_in: EventCreate) -> Event:
        """Creates an event with a unique slug derived from its name."""
        slug = generate_slug(obj_in.name, db)
        return self.create(db, obj_in=obj_in, slug=slug)

    def get_by_slug(self, db: Session, *, slug: str) -> Event | None:
        return db.query(self.model).filter(self.model.slug == slug).first()

    def _count_by_event(self, db: Session, model, event_ids: list[str]) -> dict[str, int]:
        rows = (
            db.query(model.event_id, func.count(model.id))
            .filter(model.event_id.in_(event_ids))
            .group_by(model.event_id)
            .all()
        )
        return {event_id: count for event_id, count in rows}

    def get_multi_with_counts(self, db: Session) -> list[dict]:
        """
        Lists events, newest first, each with its contact and registration counts.
        """
        events = db.query(self.model).order_by(self.model.created_at.desc()).all()
        event_ids = [event.id for event in events]
        if not event_ids:
            return []

        contact_counts = self._count_by_event(db, Contact, event_ids)
        registration_counts = self._count_by_event(db, Registration, event_ids)

        event_dicts = []
        for event in events:
            event_dict = {c.name: getattr(event, c.name) for c in event.__table__.columns}
            event_dict["contacts_count"] = contact_counts.get(event.id, 0)
            event_dict["registrations_count"] = registration_counts.get(event.id, 0)
            event_dicts.append(event_dict)
        return event_dicts

    def get_with_counts(self, db: Session, *, id: str) -> dict | None:
        event = self.get(db, id=id)
        if not event:
            return None

        event_dict = {c.name: getattr(event, c.name) for c in event.__table__.columns}
        for key, model in (
            ("contacts_count", Contact),
            ("registrations_count", Registration),
            ("email_templates_count", EmailTemplate),
            ("email_campaigns_count", EmailCampaign),
        ):
            event_dict[key] = (
                db.query(func.count(model.id)).filter(model.event_id == id).scalar()
            )
        return event_dict


event = CRUDEvent(Event)
