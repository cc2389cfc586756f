# event_registration/schemas/attendee.py
from pydantic import BaseModel, Field
from typing import Optional, List, Dict

from event_registration.schemas.contact import ContactWithRegistration
from event_registration.schemas.event import EventSummary


class TemplateSummary(BaseModel):
    id: str
    name: str
    type: str
    subject: str

    model_config = {"from_attributes": True}


class AttendeeGroup(BaseModel):
    category: str
    count: int
    contacts: List[ContactWithRegistration]


class AttendeeGroups(BaseModel):
    event: EventSummary
    templates: List[TemplateSummary] = []
    groups: List[AttendeeGroup]
    status_counts: Dict[str, int]
    total: int


class SendEmailRequest(BaseModel):
    contact_ids: List[str] = Field(default_factory=list)
    template_id: Optional[str] = None


class DispatchResult(BaseModel):
    sent_count: int
    failed_count: int
    total: int
