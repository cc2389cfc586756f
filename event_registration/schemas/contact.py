# event_registration/schemas/contact.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from event_registration.constants.statuses import ContactStatus


class ContactCreate(BaseModel):
    first_name: str = Field(..., min_length=1, json_schema_extra={"example": "Ana"})
    last_name: str = Field(..., min_length=1, json_schema_extra={"example": "Silva"})
    email: EmailStr
    phone: Optional[str] = None
    organization: Optional[str] = None
    designation: Optional[str] = None
    category: Optional[str] = None
    status: Optional[ContactStatus] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.strip().lower()


class ContactUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    organization: Optional[str] = None
    designation: Optional[str] = None
    category: Optional[str] = None
    status: Optional[ContactStatus] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().lower() if value else value


class ContactRegistrationSummary(BaseModel):
    status: str
    registered_at: Optional[datetime] = None
    confirmation_code: str

    model_config = {"from_attributes": True}


class Contact(BaseModel):
    id: str
    event_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    organization: Optional[str] = None
    designation: Optional[str] = None
    category: Optional[str] = None
    status: ContactStatus
    invite_token: Optional[str] = None
    import_batch: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContactWithRegistration(Contact):
    registration: Optional[ContactRegistrationSummary] = None


class ContactEmailHistoryItem(BaseModel):
    id: str
    status: str
    sent_at: Optional[datetime] = None
    subject: str

    model_config = {"from_attributes": True}


class ContactEventSummary(BaseModel):
    slug: str
    name: str
    categories: List[str] = []

    model_config = {"from_attributes": True}


class ContactDetail(ContactWithRegistration):
    email_logs: List[ContactEmailHistoryItem] = []
    event: ContactEventSummary


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ContactPage(BaseModel):
    contacts: List[ContactWithRegistration]
    pagination: Pagination


class ImportSummary(BaseModel):
    import_batch: str
    total: int
    created: int
    skipped: int
    error_count: int
    # Only the first 10 row-level errors are surfaced
    errors: List[str] = []
