# event_registration/models/registration.py
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from event_registration.constants.statuses import RegistrationStatus
from event_registration.db.base_class import Base


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(
        String, primary_key=True, default=lambda: f"reg_{uuid.uuid4().hex[:12]}"
    )
    # One registration per contact
    contact_id = Column(
        String, ForeignKey("contacts.id"), nullable=False, unique=True, index=True
    )
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)

    status = Column(
        String, nullable=False, default=RegistrationStatus.CONFIRMED.value
    )
    # A unique, human-readable code printed on the badge and used for check-in
    confirmation_code = Column(String, nullable=False, unique=True, index=True)
    registered_at = Column(DateTime, nullable=True, default=datetime.utcnow)
    badge_generated = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    contact = relationship("Contact", back_populates="registration")
    event = relationship("Event", back_populates="registrations")
    badge = relationship(
        "Badge",
        back_populates="registration",
        uselist=False,
        cascade="all, delete-orphan",
    )
