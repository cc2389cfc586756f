# event_registration/schemas/badge.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class BadgeTemplateUpdate(BaseModel):
    name: Optional[str] = None
    design_json: Optional[dict] = None
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)
    background_url: Optional[str] = None


class BadgeTemplate(BaseModel):
    id: str
    event_id: str
    name: str
    design_json: dict = {}
    width: int
    height: int
    background_url: Optional[str] = None
    updated_at: datetime

    model_config = {"from_attributes": True}


class BadgeGenerateRequest(BaseModel):
    # Empty means every confirmed registration of the event
    registration_ids: Optional[List[str]] = None


class BadgeGenerateResult(BaseModel):
    generated: int
    failed: int = 0
    total: int


class BadgeSendResult(BaseModel):
    sent: int
    failed: int
    total: int
