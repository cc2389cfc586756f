# event_registration/crud/crud_badge.py
from sqlalchemy.orm import Session

from event_registration.models.badge import Badge, BadgeTemplate
from event_registration.models.registration import Registration
from event_registration.schemas.badge import BadgeTemplateUpdate

DEFAULT_BADGE_NAME = "Default Badge"


class CRUDBadgeTemplate:
    model = BadgeTemplate

    def get_by_event(self, db: Session, *, event_id: str) -> BadgeTemplate | None:
        return db.query(self.model).filter(self.model.event_id == event_id).first()

    def get_or_create_default(self, db: Session, *, event_id: str) -> BadgeTemplate:
        template = self.get_by_event(db, event_id=event_id)
        if template:
            return template
        template = self.model(
            event_id=event_id, name=DEFAULT_BADGE_NAME, design_json={"theme": "default"}
        )
        db.add(template)
        db.commit()
        db.refresh(template)
        return template

    def upsert(self, db: Session, *, event_id: str, obj_in: BadgeTemplateUpdate) -> BadgeTemplate:
        template = self.get_by_event(db, event_id=event_id)
        if template is None:
            template = self.model(
                event_id=event_id,
                name=obj_in.name or DEFAULT_BADGE_NAME,
                design_json=obj_in.design_json or {},
            )
        else:
            if obj_in.name is not None:
                template.name = obj_in.name
            if obj_in.design_json is not None:
                template.design_json = obj_in.design_json
        template.width = obj_in.width or 400
        template.height = obj_in.height or 600
        template.background_url = obj_in.background_url
        db.add(template)
        db.commit()
        db.refresh(template)
        return template


class CRUDBadge:
    model = Badge

    def upsert_for_registration(
        self,
        db: Session,
        *,
        registration: Registration,
        template: BadgeTemplate,
        qr_code_data: str,
    ) -> Badge:
        """Regenerating overwrites the QR payload of the existing badge."""
        badge = (
            db.query(self.model)
            .filter(self.model.registration_id == registration.id)
            .first()
        )
        if badge is None:
            badge = self.model(
                registration_id=registration.id,
                template_id=template.id,
                qr_code_data=qr_code_data,
            )
        else:
            badge.qr_code_data = qr_code_data
        db.add(badge)
        db.commit()
        return badge


badge_template = CRUDBadgeTemplate()
badge = CRUDBadge()
