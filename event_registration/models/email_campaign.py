# event_registration/models/email_campaign.py
"""
EmailCampaign model - one send of a template to a set of contacts.

Ad-hoc sends from the attendees page create one implicitly for the audit
trail; filtered campaigns are created explicitly as drafts.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from event_registration.constants.statuses import CampaignStatus
from event_registration.db.base_class import Base


class EmailCampaign(Base):
    __tablename__ = "email_campaigns"

    id = Column(
        String, primary_key=True, default=lambda: f"cmp_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)
    template_id = Column(
        String, ForeignKey("email_templates.id"), nullable=False, index=True
    )

    name = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default=CampaignStatus.DRAFT.value)
    # {"category": ..., "registrationStatus": ..., "all": bool}
    recipient_filter = Column(JSON, nullable=False, default=dict)

    total_recipients = Column(Integer, nullable=False, default=0)
    sent_count = Column(Integer, nullable=False, default=0)
    failed_count = Column(Integer, nullable=False, default=0)

    scheduled_at = Column(DateTime, nullable=True)
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    event = relationship("Event", back_populates="email_campaigns")
    template = relationship("EmailTemplate", back_populates="campaigns")
    logs = relationship(
        "EmailLog", back_populates="campaign", cascade="all, delete-orphan"
    )
