# event_registration/constants/statuses.py
"""
Status and type values shared by models, schemas and services.

`str` enums so values compare equal to the raw strings stored in the
database and serialise as plain strings in JSON.
"""
from enum import Enum


class ContactStatus(str, Enum):
    IMPORTED = "IMPORTED"
    INVITED = "INVITED"
    REGISTERED = "REGISTERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def all_values(cls) -> list[str]:
        """Return all valid status values, in display order."""
        return [member.value for member in cls]


class RegistrationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class EmailTemplateType(str, Enum):
    INVITATION = "INVITATION"
    REMINDER = "REMINDER"
    CONFIRMATION = "CONFIRMATION"
    ANNOUNCEMENT = "ANNOUNCEMENT"
    BADGE_DELIVERY = "BADGE_DELIVERY"
    CUSTOM = "CUSTOM"


class CampaignStatus(str, Enum):
    DRAFT = "DRAFT"
    SENDING = "SENDING"
    COMPLETED = "COMPLETED"


class EmailLogStatus(str, Enum):
    SENT = "SENT"
    FAILED = "FAILED"


UNCATEGORIZED = "Uncategorized"
NOT_REGISTERED = "NOT REGISTERED"
