# event_registration/models/email_template.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import relationship

from event_registration.db.base_class import Base


class EmailTemplate(Base):
    __tablename__ = "email_templates"

    id = Column(
        String, primary_key=True, default=lambda: f"tpl_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    # INVITATION, REMINDER, CONFIRMATION, ANNOUNCEMENT, BADGE_DELIVERY, CUSTOM
    type = Column(String, nullable=False)
    subject = Column(String(500), nullable=False)
    body_html = Column(Text, nullable=False)
    body_json = Column(JSON, nullable=True)  # editor state, opaque to the server
    header_html = Column(Text, nullable=True)
    footer_html = Column(Text, nullable=True)
    variables = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    event = relationship("Event", back_populates="email_templates")
    campaigns = relationship(
        "EmailCampaign", back_populates="template", cascade="all, delete-orphan"
    )
