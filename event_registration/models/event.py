# event_registration/models/event.py
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, JSON, String, Text
from sqlalchemy.orm import relationship

from event_registration.db.base_class import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(
        String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}"
    )
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    venue = Column(String, nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    # Organizer-defined, ordered list of free-text category labels
    categories = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Deleting an event removes everything that hangs off it
    contacts = relationship(
        "Contact", back_populates="event", cascade="all, delete-orphan"
    )
    registrations = relationship(
        "Registration", back_populates="event", cascade="all, delete-orphan"
    )
    email_templates = relationship(
        "EmailTemplate", back_populates="event", cascade="all, delete-orphan"
    )
    email_campaigns = relationship(
        "EmailCampaign", back_populates="event", cascade="all, delete-orphan"
    )
    badge_template = relationship(
        "BadgeTemplate",
        back_populates="event",
        uselist=False,
        cascade="all, delete-orphan",
    )
