# event_registration/schemas/registration.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from event_registration.constants.statuses import RegistrationStatus
from event_registration.schemas.contact import Contact


class PublicRegistrationCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    organization: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)


class PublicRegistrationResult(BaseModel):
    success: bool = True
    confirmation_code: str
    message: str = "Registration successful!"


class InviteContact(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    organization: Optional[str] = None
    designation: Optional[str] = None

    model_config = {"from_attributes": True}


class InvitePrefill(BaseModel):
    contact: InviteContact
    event_name: str


class BadgeSummary(BaseModel):
    id: str
    pdf_url: Optional[str] = None

    model_config = {"from_attributes": True}


class Registration(BaseModel):
    id: str
    contact_id: str
    event_id: str
    status: RegistrationStatus
    confirmation_code: str
    registered_at: Optional[datetime] = None
    badge_generated: bool
    created_at: datetime
    contact: Contact
    badge: Optional[BadgeSummary] = None

    model_config = {"from_attributes": True}


class RegistrationStats(BaseModel):
    total: int
    confirmed: int
    pending: int
    cancelled: int
    total_contacts: int
    conversion_rate: int
