# event_registration/crud/crud_contact.py
from typing import Iterable

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from .base import CRUDBase
from event_registration.constants.statuses import ContactStatus
from event_registration.models.contact import Contact
from event_registration.models.registration import Registration
from event_registration.schemas.contact import ContactCreate, ContactUpdate


class CRUDContact(CRUDBase[Contact, ContactCreate, ContactUpdate]):
    def get_for_event(self, db: Session, *, event_id: str, contact_id: str) -> Contact | None:
        return (
            db.query(self.model)
            .options(joinedload(self.model.registration))
            .filter(self.model.id == contact_id, self.model.event_id == event_id)
            .first()
        )

    def get_by_email(self, db: Session, *, event_id: str, email: str) -> Contact | None:
        return (
            db.query(self.model)
            .filter(
                self.model.event_id == event_id,
                self.model.email == email.strip().lower(),
            )
            .first()
        )

    def get_by_invite_token(self, db: Session, *, token: str) -> Contact | None:
        return db.query(self.model).filter(self.model.invite_token == token).first()

    def filtered_query(
        self,
        db: Session,
        *,
        event_id: str,
        search: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ):
        """
        Base query for the contacts/attendees views.

        `search` is a case-insensitive substring match over first name,
        last name, email and organization.
        """
        query = db.query(self.model).filter(self.model.event_id == event_id)

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    self.model.first_name.ilike(pattern),
                    self.model.last_name.ilike(pattern),
                    self.model.email.ilike(pattern),
                    self.model.organization.ilike(pattern),
                )
            )
        if category:
            query = query.filter(self.model.category == category)
        if status:
            query = query.filter(self.model.status == status)
        return query

    def get_filtered_by_category(self, db: Session, *, event_id: str, **filters) -> list[Contact]:
        """Contacts ordered by (category ascending, newest first) for grouping."""
        return (
            self.filtered_query(db, event_id=event_id, **filters)
            .options(joinedload(self.model.registration))
            .order_by(self.model.category.asc().nulls_last(), self.model.created_at.desc())
            .all()
        )

    def get_page(
        self, db: Session, *, event_id: str, skip: int = 0, limit: int = 50, **filters
    ) -> tuple[list[Contact], int]:
        query = self.filtered_query(db, event_id=event_id, **filters)
        total = query.count()
        contacts = (
            query.options(joinedload(self.model.registration))
            .order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return contacts, total

    def get_by_ids(self, db: Session, *, event_id: str, ids: Iterable[str]) -> list[Contact]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.registration))
            .filter(self.model.event_id == event_id, self.model.id.in_(list(ids)))
            .order_by(self.model.created_at.asc())
            .all()
        )

    def get_by_recipient_filter(
        self,
        db: Session,
        *,
        event_id: str,
        category: str | None = None,
        registration_status: str | None = None,
    ) -> list[Contact]:
        query = (
            db.query(self.model)
            .options(joinedload(self.model.registration))
            .filter(self.model.event_id == event_id)
        )
        if category:
            query = query.filter(self.model.category == category)
        if registration_status:
            query = query.join(Registration, Registration.contact_id == self.model.id).filter(
                Registration.status == registration_status
            )
        return query.order_by(self.model.created_at.asc()).all()

    def get_multi_for_export(self, db: Session, *, event_id: str) -> list[Contact]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.registration))
            .filter(self.model.event_id == event_id)
            .order_by(self.model.created_at.asc())
            .all()
        )

    def create_for_event(self, db: Session, *, obj_in: ContactCreate, event_id: str) -> Contact:
        return self.create(db, obj_in=obj_in, event_id=event_id)

    def create_imported(
        self,
        db: Session,
        *,
        event_id: str,
        fields: dict,
        import_batch: str,
        source_row: dict,
    ) -> Contact:
        """
        Inserts one bulk-imported contact and commits.

        A duplicate (event_id, email) raises `IntegrityError`; the caller
        rolls back and counts the row as skipped.
        """
        db_obj = self.model(
            event_id=event_id,
            import_batch=import_batch,
            row_metadata=source_row,
            status=ContactStatus.IMPORTED.value,
            **fields,
        )
        db.add(db_obj)
        db.commit()
        return db_obj

    def mark_status(self, db: Session, *, contact: Contact, status: ContactStatus) -> Contact:
        contact.status = status.value
        db.add(contact)
        db.commit()
        db.refresh(contact)
        return contact

    def count_for_event(self, db: Session, *, event_id: str) -> int:
        return db.query(self.model).filter(self.model.event_id == event_id).count()

    def count_by_category_and_status(self, db: Session, *, event_id: str) -> list[tuple]:
        """Rows of (category, status, count) for every contact of the event."""
        return (
            db.query(self.model.category, self.model.status, func.count(self.model.id))
            .filter(self.model.event_id == event_id)
            .group_by(self.model.category, self.model.status)
            .all()
        )


contact = CRUDContact(Contact)
