# event_registration/models/badge.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from event_registration.db.base_class import Base


class BadgeTemplate(Base):
    """Per-event badge design settings."""

    __tablename__ = "badge_templates"

    id = Column(
        String, primary_key=True, default=lambda: f"btpl_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(
        String, ForeignKey("events.id"), nullable=False, unique=True, index=True
    )
    name = Column(String, nullable=False, default="Default Badge")
    design_json = Column(JSON, nullable=False, default=dict)
    width = Column(Integer, nullable=False, default=400)
    height = Column(Integer, nullable=False, default=600)
    background_url = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    event = relationship("Event", back_populates="badge_template")
    badges = relationship("Badge", back_populates="template")


class Badge(Base):
    """The generated badge of one registration."""

    __tablename__ = "badges"

    id = Column(
        String, primary_key=True, default=lambda: f"bdg_{uuid.uuid4().hex[:12]}"
    )
    registration_id = Column(
        String, ForeignKey("registrations.id"), nullable=False, unique=True, index=True
    )
    template_id = Column(String, ForeignKey("badge_templates.id"), nullable=False)
    # The URL encoded in the QR code
    qr_code_data = Column(String, nullable=False)
    pdf_url = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    registration = relationship("Registration", back_populates="badge")
    template = relationship("BadgeTemplate", back_populates="badges")
