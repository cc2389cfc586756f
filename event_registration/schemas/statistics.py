# event_registration/schemas/statistics.py
from pydantic import BaseModel
from typing import Optional, List, Dict
from datetime import datetime


class StatisticsEvent(BaseModel):
    id: str
    name: str
    categories: List[str] = []
    start_date: datetime
    end_date: datetime
    venue: Optional[str] = None

    model_config = {"from_attributes": True}


class StatisticsSummary(BaseModel):
    total: int
    status_counts: Dict[str, int]
    registration_rate: int
    invite_rate: int
    emails_sent: int
    emails_failed: int


class CategoryBreakdown(BaseModel):
    category: str
    total: int
    IMPORTED: int = 0
    INVITED: int = 0
    REGISTERED: int = 0
    CANCELLED: int = 0


class CampaignSummary(BaseModel):
    id: str
    name: str
    status: str
    sent_count: int
    failed_count: int
    total_recipients: int
    sent_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EventStatistics(BaseModel):
    event: StatisticsEvent
    summary: StatisticsSummary
    category_breakdown: List[CategoryBreakdown]
    campaigns: List[CampaignSummary]
