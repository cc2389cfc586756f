# event_registration/crud/crud_registration.py
from datetime import datetime
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from event_registration.constants.statuses import RegistrationStatus
from event_registration.models.contact import Contact
from event_registration.models.registration import Registration
from event_registration.utils.codes import generate_confirmation_code


class CRUDRegistration:
    """CRUD operations for registrations."""

    model = Registration

    def get_by_confirmation_code(self, db: Session, *, code: str) -> Registration | None:
        return (
            db.query(self.model)
            .options(joinedload(self.model.contact), joinedload(self.model.event))
            .filter(self.model.confirmation_code == code)
            .first()
        )

    def _unique_confirmation_code(self, db: Session) -> str:
        while True:
            code = generate_confirmation_code()
            if (
                not db.query(self.model.id)
                .filter(self.model.confirmation_code == code)
                .first()
            ):
                return code

    def create_for_contact(
        self,
        db: Session,
        *,
        contact: Contact,
        status: RegistrationStatus = RegistrationStatus.CONFIRMED,
    ) -> Registration:
        """
        Creates a registration for a contact and generates a unique confirmation code.
        """
        db_obj = self.model(
            contact_id=contact.id,
            event_id=contact.event_id,
            status=status.value,
            confirmation_code=self._unique_confirmation_code(db),
            registered_at=datetime.utcnow(),
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, db_obj: Registration) -> None:
        db.delete(db_obj)
        db.commit()

    def get_multi_by_event(
        self, db: Session, *, event_id: str, status: str | None = None
    ) -> list[Registration]:
        query = (
            db.query(self.model)
            .options(joinedload(self.model.contact), joinedload(self.model.badge))
            .filter(self.model.event_id == event_id)
        )
        if status:
            query = query.filter(self.model.status == status)
        return query.order_by(self.model.created_at.desc()).all()

    def get_multi_for_export(self, db: Session, *, event_id: str) -> list[Registration]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.contact))
            .filter(self.model.event_id == event_id)
            .order_by(self.model.registered_at.asc())
            .all()
        )

    def get_confirmed(
        self,
        db: Session,
        *,
        event_id: str,
        ids: Iterable[str] | None = None,
        badge_generated: bool | None = None,
    ) -> list[Registration]:
        query = (
            db.query(self.model)
            .options(joinedload(self.model.contact))
            .filter(
                self.model.event_id == event_id,
                self.model.status == RegistrationStatus.CONFIRMED.value,
            )
        )
        if ids:
            query = query.filter(self.model.id.in_(list(ids)))
        if badge_generated is not None:
            query = query.filter(self.model.badge_generated == badge_generated)
        return query.order_by(self.model.created_at.asc()).all()

    def count_by_status(self, db: Session, *, event_id: str) -> dict[str, int]:
        rows = (
            db.query(self.model.status, func.count(self.model.id))
            .filter(self.model.event_id == event_id)
            .group_by(self.model.status)
            .all()
        )
        return {status: count for status, count in rows}

    def mark_badge_generated(self, db: Session, *, registration: Registration) -> Registration:
        registration.badge_generated = True
        db.add(registration)
        db.commit()
        return registration


registration = CRUDRegistration()
