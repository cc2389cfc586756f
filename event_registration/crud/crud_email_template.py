# event_registration/crud/crud_email_template.py
from sqlalchemy.orm import Session

from .base import CRUDBase
from event_registration.models.email_template import EmailTemplate
from event_registration.schemas.email_template import (
    EmailTemplateCreate,
    EmailTemplateUpdate,
)


class CRUDEmailTemplate(CRUDBase[EmailTemplate, EmailTemplateCreate, EmailTemplateUpdate]):
    def get_for_event(self, db: Session, *, event_id: str, template_id: str) -> EmailTemplate | None:
        return (
            db.query(self.model)
            .filter(self.model.id == template_id, self.model.event_id == event_id)
            .first()
        )

    def get_multi_by_event(self, db: Session, *, event_id: str) -> list[EmailTemplate]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.created_at.desc())
            .all()
        )


email_template = CRUDEmailTemplate(EmailTemplate)
