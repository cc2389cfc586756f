# event_registration/models/email_log.py
"""
EmailLog model - append-only audit trail of send attempts.

At most one row per (campaign, contact): re-running a campaign skips
contacts that already have one.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from event_registration.db.base_class import Base


class EmailLog(Base):
    __tablename__ = "email_logs"
    __table_args__ = (
        UniqueConstraint("campaign_id", "contact_id", name="uq_email_logs_campaign_contact"),
    )

    id = Column(
        String, primary_key=True, default=lambda: f"elog_{uuid.uuid4().hex[:12]}"
    )
    campaign_id = Column(
        String, ForeignKey("email_campaigns.id"), nullable=False, index=True
    )
    contact_id = Column(String, ForeignKey("contacts.id"), nullable=False, index=True)

    # Recipient details as sent (the contact may change later)
    to_email = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)

    # SENT or FAILED
    status = Column(String(20), nullable=False)
    sent_at = Column(DateTime, nullable=True)
    error_message = Column(Text, nullable=True)
    provider_message_id = Column(String(500), nullable=True)  # Resend message ID

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    campaign = relationship("EmailCampaign", back_populates="logs")
    contact = relationship("Contact", back_populates="email_logs")
