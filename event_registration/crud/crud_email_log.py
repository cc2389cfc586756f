# event_registration/crud/crud_email_log.py
"""
CRUD operations for email logs.

One row per send attempt, at most one per (campaign, contact).
"""
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from event_registration.constants.statuses import EmailLogStatus
from event_registration.models.email_campaign import EmailCampaign
from event_registration.models.email_log import EmailLog


class CRUDEmailLog:
    """CRUD operations for email logs."""

    model = EmailLog

    def exists(self, db: Session, *, campaign_id: str, contact_id: str) -> bool:
        return (
            db.query(self.model.id)
            .filter(
                self.model.campaign_id == campaign_id,
                self.model.contact_id == contact_id,
            )
            .first()
            is not None
        )

    def create_sent(
        self,
        db: Session,
        *,
        campaign_id: str,
        contact_id: str,
        to_email: str,
        subject: str,
        provider_message_id: str | None,
    ) -> EmailLog:
        log = self.model(
            campaign_id=campaign_id,
            contact_id=contact_id,
            to_email=to_email,
            subject=subject,
            status=EmailLogStatus.SENT.value,
            sent_at=datetime.utcnow(),
            provider_message_id=provider_message_id,
        )
        db.add(log)
        db.commit()
        return log

    def create_failed(
        self,
        db: Session,
        *,
        campaign_id: str,
        contact_id: str,
        to_email: str,
        subject: str,
        error_message: str,
    ) -> EmailLog:
        log = self.model(
            campaign_id=campaign_id,
            contact_id=contact_id,
            to_email=to_email,
            subject=subject,
            status=EmailLogStatus.FAILED.value,
            error_message=error_message,
        )
        db.add(log)
        db.commit()
        return log

    def count_by_status(self, db: Session, *, campaign_id: str) -> dict[str, int]:
        rows = (
            db.query(self.model.status, func.count(self.model.id))
            .filter(self.model.campaign_id == campaign_id)
            .group_by(self.model.status)
            .all()
        )
        return {status: count for status, count in rows}

    def count_by_status_for_event(self, db: Session, *, event_id: str) -> dict[str, int]:
        rows = (
            db.query(self.model.status, func.count(self.model.id))
            .join(EmailCampaign, EmailCampaign.id == self.model.campaign_id)
            .filter(EmailCampaign.event_id == event_id)
            .group_by(self.model.status)
            .all()
        )
        return {status: count for status, count in rows}

    def get_recent_by_campaign(self, db: Session, *, campaign_id: str, limit: int = 100) -> list[EmailLog]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.contact))
            .filter(self.model.campaign_id == campaign_id)
            .order_by(self.model.created_at.desc())
            .limit(limit)
            .all()
        )

    def get_by_contact(self, db: Session, *, contact_id: str) -> list[EmailLog]:
        return (
            db.query(self.model)
            .filter(self.model.contact_id == contact_id)
            .order_by(self.model.created_at.desc())
            .all()
        )


email_log = CRUDEmailLog()
