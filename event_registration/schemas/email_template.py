# event_registration/schemas/email_template.py
from pydantic import BaseModel, Field
from typing import Any, Optional, List
from datetime import datetime

from event_registration.constants.statuses import EmailTemplateType


class EmailTemplateCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: EmailTemplateType
    subject: str = Field(..., min_length=1)
    body_html: str = Field(..., min_length=1)
    body_json: Optional[Any] = None
    header_html: Optional[str] = None
    footer_html: Optional[str] = None
    variables: List[str] = Field(default_factory=list)


class EmailTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[EmailTemplateType] = None
    subject: Optional[str] = Field(None, min_length=1)
    body_html: Optional[str] = Field(None, min_length=1)
    body_json: Optional[Any] = None
    header_html: Optional[str] = None
    footer_html: Optional[str] = None
    variables: Optional[List[str]] = None


class EmailTemplate(BaseModel):
    id: str
    event_id: str
    name: str
    type: EmailTemplateType
    subject: str
    body_html: str
    body_json: Optional[Any] = None
    header_html: Optional[str] = None
    footer_html: Optional[str] = None
    variables: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
