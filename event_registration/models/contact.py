# event_registration/models/contact.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, UniqueConstraint
from sqlalchemy.orm import relationship

from event_registration.constants.statuses import ContactStatus
from event_registration.db.base_class import Base


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (
        UniqueConstraint("event_id", "email", name="uq_contacts_event_email"),
    )

    id = Column(
        String, primary_key=True, default=lambda: f"con_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=True)
    organization = Column(String, nullable=True)
    designation = Column(String, nullable=True)
    category = Column(String, nullable=True, index=True)

    status = Column(String, nullable=False, default=ContactStatus.IMPORTED.value)
    invite_token = Column(String, nullable=True, unique=True, index=True)

    # Shared id for every contact created by the same bulk import
    import_batch = Column(String, nullable=True, index=True)
    # The untouched source row of a bulk import. "metadata" is reserved on
    # declarative classes, hence the attribute name.
    row_metadata = Column("metadata", JSON, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    event = relationship("Event", back_populates="contacts")
    registration = relationship(
        "Registration",
        back_populates="contact",
        uselist=False,
        cascade="all, delete-orphan",
    )
    email_logs = relationship(
        "EmailLog", back_populates="contact", cascade="all, delete-orphan"
    )
