# event_registration/crud/crud_email_campaign.py
"""
CRUD operations for email campaigns.

Status flow: DRAFT -> SENDING -> COMPLETED.
"""
from datetime import datetime

from sqlalchemy.orm import Session, joinedload

from event_registration.constants.statuses import CampaignStatus
from event_registration.models.email_campaign import EmailCampaign
from event_registration.models.email_template import EmailTemplate
from event_registration.schemas.email_campaign import EmailCampaignCreate


class CRUDEmailCampaign:
    """CRUD operations for email campaigns."""

    model = EmailCampaign

    def get(self, db: Session, campaign_id: str) -> EmailCampaign | None:
        return (
            db.query(self.model)
            .options(joinedload(self.model.template), joinedload(self.model.event))
            .filter(self.model.id == campaign_id)
            .first()
        )

    def get_for_event(self, db: Session, *, event_id: str, campaign_id: str) -> EmailCampaign | None:
        campaign = self.get(db, campaign_id)
        if campaign and campaign.event_id == event_id:
            return campaign
        return None

    def get_multi_by_event(self, db: Session, *, event_id: str, limit: int | None = None) -> list[EmailCampaign]:
        query = (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.created_at.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def create_draft(self, db: Session, *, obj_in: EmailCampaignCreate, event_id: str) -> EmailCampaign:
        recipient_filter = (
            obj_in.recipient_filter.model_dump(mode="json", by_alias=True, exclude_none=True)
            if obj_in.recipient_filter
            else {}
        )
        campaign = self.model(
            event_id=event_id,
            template_id=obj_in.template_id,
            name=obj_in.name,
            status=CampaignStatus.DRAFT.value,
            recipient_filter=recipient_filter,
            scheduled_at=obj_in.scheduled_at,
        )
        db.add(campaign)
        db.commit()
        db.refresh(campaign)
        return campaign

    def create_adhoc(
        self, db: Session, *, event_id: str, template: EmailTemplate, total_recipients: int
    ) -> EmailCampaign:
        """Audit-trail campaign for a direct send from the attendees page."""
        campaign = self.model(
            event_id=event_id,
            template_id=template.id,
            name=f"{template.name} - {datetime.utcnow():%Y-%m-%d}",
            status=CampaignStatus.SENDING.value,
            recipient_filter={},
            total_recipients=total_recipients,
        )
        db.add(campaign)
        db.commit()
        db.refresh(campaign)
        return campaign

    def mark_sending(self, db: Session, *, campaign: EmailCampaign, total_recipients: int):
        """Mark campaign as currently sending."""
        campaign.status = CampaignStatus.SENDING.value
        campaign.total_recipients = total_recipients
        db.commit()
        db.refresh(campaign)

    def mark_completed(
        self, db: Session, *, campaign: EmailCampaign, sent_count: int, failed_count: int
    ):
        """Mark campaign as completed with its final delivery counts."""
        campaign.status = CampaignStatus.COMPLETED.value
        campaign.sent_count = sent_count
        campaign.failed_count = failed_count
        campaign.sent_at = datetime.utcnow()
        db.commit()
        db.refresh(campaign)

    def delete(self, db: Session, *, campaign: EmailCampaign) -> None:
        db.delete(campaign)
        db.commit()


email_campaign = CRUDEmailCampaign()
