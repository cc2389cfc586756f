# event_registration/services/contact_export.py
"""CSV exports of an event's contacts and registrations."""
from io import StringIO

import pandas as pd
from sqlalchemy.orm import Session

from event_registration.constants.statuses import NOT_REGISTERED
from event_registration.crud import contact as crud_contact
from event_registration.crud import registration as crud_registration

CONTACT_COLUMNS = [
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Organization",
    "Designation",
    "Category",
    "Registration Status",
    "Registered At",
]

REGISTRATION_COLUMNS = [
    "First Name",
    "Last Name",
    "Email",
    "Phone",
    "Organization",
    "Designation",
    "Category",
    "Status",
    "Registered At",
    "Confirmation Code",
]


def _iso(value) -> str:
    return value.isoformat() if value else ""


def _contact_columns(contact) -> dict:
    return {
        "First Name": contact.first_name,
        "Last Name": contact.last_name,
        "Email": contact.email,
        "Phone": contact.phone or "",
        "Organization": contact.organization or "",
        "Designation": contact.designation or "",
        "Category": contact.category or "",
    }


def _to_csv(rows: list[dict], columns: list[str]) -> str:
    df = pd.DataFrame(rows, columns=columns)
    output = StringIO()
    df.to_csv(output, index=False)
    return output.getvalue()


def export_contacts_csv(db: Session, *, event_id: str) -> str:
    """One row per contact, oldest first."""
    rows = []
    for contact in crud_contact.get_multi_for_export(db, event_id=event_id):
        registration = contact.registration
        rows.append(
            {
                **_contact_columns(contact),
                "Registration Status": registration.status if registration else NOT_REGISTERED,
                "Registered At": _iso(registration.registered_at) if registration else "",
            }
        )
    return _to_csv(rows, CONTACT_COLUMNS)


def export_registrations_csv(db: Session, *, event_id: str) -> str:
    """One row per registration, in registration order."""
    rows = [
        {
            **_contact_columns(registration.contact),
            "Status": registration.status,
            "Registered At": _iso(registration.registered_at),
            "Confirmation Code": registration.confirmation_code,
        }
        for registration in crud_registration.get_multi_for_export(db, event_id=event_id)
    ]
    return _to_csv(rows, REGISTRATION_COLUMNS)
