# event_registration/services/attendee_query.py
from typing import Optional

from sqlalchemy.orm import Session

from event_registration.constants.statuses import UNCATEGORIZED, ContactStatus
from event_registration.crud import contact as crud_contact


def list_grouped(
    db: Session,
    *,
    event_id: str,
    search: Optional[str] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
) -> dict:
    """
    Filtered contacts of an event grouped by category.

    Groups keep the order in which their category first appears among the
    contacts ordered by (category ascending, newest first). Contacts with
    no category go to the "Uncategorized" group. Status counts cover the
    filtered set.
    """
    contacts = crud_contact.get_filtered_by_category(
        db, event_id=event_id, search=search, category=category, status=status
    )

    groups: dict[str, list] = {}
    status_counts = {value: 0 for value in ContactStatus.all_values()}
    for contact in contacts:
        groups.setdefault(contact.category or UNCATEGORIZED, []).append(contact)
        status_counts[contact.status] = status_counts.get(contact.status, 0) + 1

    return {
        "groups": [
            {"category": name, "count": len(members), "contacts": members}
            for name, members in groups.items()
        ],
        "status_counts": status_counts,
        "total": len(contacts),
    }
