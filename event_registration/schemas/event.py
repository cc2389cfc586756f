# event_registration/schemas/event.py
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime


class EventBase(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Tech Conference 2026"})
    description: Optional[str] = Field(
        None, json_schema_extra={"example": "Annual technology conference"}
    )
    venue: Optional[str] = Field(None, json_schema_extra={"example": "Convention Center"})
    start_date: datetime
    end_date: datetime


class EventCreate(EventBase):
    categories: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


# Schema for updating an event. All fields are optional.
class EventUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    venue: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None
    categories: Optional[List[str]] = None


class Event(EventBase):
    id: str = Field(..., json_schema_extra={"example": "evt_c5a6d8e0f9b1"})
    slug: str = Field(..., json_schema_extra={"example": "tech-conference-2026"})
    is_active: bool
    categories: List[str] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class EventWithCounts(Event):
    contacts_count: int = 0
    registrations_count: int = 0
    email_templates_count: int = 0
    email_campaigns_count: int = 0


class EventSummary(BaseModel):
    id: str
    name: str
    slug: str
    categories: List[str] = []

    model_config = {"from_attributes": True}
