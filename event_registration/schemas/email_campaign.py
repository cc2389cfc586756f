# event_registration/schemas/email_campaign.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from event_registration.constants.statuses import CampaignStatus, RegistrationStatus
from event_registration.schemas.email_template import EmailTemplate


class RecipientFilter(BaseModel):
    category: Optional[str] = None
    registration_status: Optional[RegistrationStatus] = Field(
        None, alias="registrationStatus"
    )
    all: Optional[bool] = None

    model_config = {"populate_by_name": True}


class EmailCampaignCreate(BaseModel):
    name: str = Field(..., min_length=1)
    template_id: str = Field(..., min_length=1)
    recipient_filter: Optional[RecipientFilter] = None
    scheduled_at: Optional[datetime] = None


class EmailCampaign(BaseModel):
    id: str
    event_id: str
    template_id: str
    name: str
    status: CampaignStatus
    recipient_filter: dict = {}
    total_recipients: int
    sent_count: int
    failed_count: int
    scheduled_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class LogContact(BaseModel):
    first_name: str
    last_name: str
    email: str

    model_config = {"from_attributes": True}


class EmailLog(BaseModel):
    id: str
    campaign_id: str
    contact_id: str
    to_email: str
    subject: str
    status: str
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None
    provider_message_id: Optional[str] = None
    created_at: datetime
    contact: Optional[LogContact] = None

    model_config = {"from_attributes": True}


class EmailCampaignDetail(EmailCampaign):
    template: EmailTemplate
    logs: List[EmailLog] = []
