# event_registration/services/statistics.py
import logging

from sqlalchemy.orm import Session

from event_registration.constants.statuses import (
    UNCATEGORIZED,
    ContactStatus,
    EmailLogStatus,
    RegistrationStatus,
)
from event_registration.crud import contact as crud_contact
from event_registration.crud import email_campaign as crud_campaign
from event_registration.crud import email_log as crud_email_log
from event_registration.crud import registration as crud_registration
from event_registration.models.event import Event

logger = logging.getLogger(__name__)

RECENT_CAMPAIGNS = 10


def percentage(part: int, whole: int) -> int:
    """Rounded percentage, halves rounded up. 0 when `whole` is 0."""
    if whole <= 0:
        return 0
    return int(part * 100 / whole + 0.5)


def get_event_statistics(db: Session, *, event: Event) -> dict:
    status_counts = {value: 0 for value in ContactStatus.all_values()}
    breakdown: dict[str, dict] = {}

    for category, contact_status, count in crud_contact.count_by_category_and_status(
        db, event_id=event.id
    ):
        status_counts[contact_status] = status_counts.get(contact_status, 0) + count
        bucket = breakdown.setdefault(
            category or UNCATEGORIZED,
            {"total": 0, **{value: 0 for value in ContactStatus.all_values()}},
        )
        bucket["total"] += count
        bucket[contact_status] = bucket.get(contact_status, 0) + count

    total = sum(status_counts.values())
    registered = status_counts[ContactStatus.REGISTERED.value]
    invited = status_counts[ContactStatus.INVITED.value]
    email_counts = crud_email_log.count_by_status_for_event(db, event_id=event.id)

    category_breakdown = sorted(
        ({"category": name, **counts} for name, counts in breakdown.items()),
        key=lambda item: item["total"],
        reverse=True,
    )

    return {
        "event": event,
        "summary": {
            "total": total,
            "status_counts": status_counts,
            "registration_rate": percentage(registered, total),
            "invite_rate": percentage(invited + registered, total),
            "emails_sent": email_counts.get(EmailLogStatus.SENT.value, 0),
            "emails_failed": email_counts.get(EmailLogStatus.FAILED.value, 0),
        },
        "category_breakdown": category_breakdown,
        "campaigns": crud_campaign.get_multi_by_event(
            db, event_id=event.id, limit=RECENT_CAMPAIGNS
        ),
    }


def get_registration_stats(db: Session, *, event_id: str) -> dict:
    counts = crud_registration.count_by_status(db, event_id=event_id)
    total = sum(counts.values())
    total_contacts = crud_contact.count_for_event(db, event_id=event_id)
    return {
        "total": total,
        "confirmed": counts.get(RegistrationStatus.CONFIRMED.value, 0),
        "pending": counts.get(RegistrationStatus.PENDING.value, 0),
        "cancelled": counts.get(RegistrationStatus.CANCELLED.value, 0),
        "total_contacts": total_contacts,
        "conversion_rate": percentage(total, total_contacts),
    }
