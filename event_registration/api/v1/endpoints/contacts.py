# event_registration/api/v1/endpoints/contacts.py
import json
import logging
import math
from typing import Optional

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.constants.statuses import ContactStatus
from event_registration.crud import crud_contact, crud_email_log
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.contact import (
    ContactCreate,
    ContactDetail,
    ContactEmailHistoryItem,
    ContactPage,
    ContactUpdate,
    ContactWithRegistration,
    ImportSummary,
)
from event_registration.schemas.token import TokenPayload
from event_registration.services import contact_export, contact_import

router = APIRouter(tags=["Contacts"])
logger = logging.getLogger(__name__)


def _get_contact_or_404(db: Session, event_id: str, contact_id: str):
    contact = crud_contact.contact.get_for_event(
        db, event_id=event_id, contact_id=contact_id
    )
    if not contact:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found"
        )
    return contact


@router.get("/events/{eventId}/contacts", response_model=ContactPage)
def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    search: Optional[str] = None,
    category: Optional[str] = None,
    status_filter: Optional[ContactStatus] = Query(None, alias="status"),
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Paginated contacts of an event, newest first."""
    contacts, total = crud_contact.contact.get_page(
        db,
        event_id=event.id,
        skip=(page - 1) * limit,
        limit=limit,
        search=search,
        category=category,
        status=status_filter.value if status_filter else None,
    )
    return {
        "contacts": contacts,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit),
        },
    }


@router.post(
    "/events/{eventId}/contacts",
    response_model=ContactWithRegistration,
    status_code=status.HTTP_201_CREATED,
)
def create_contact(
    contact_in: ContactCreate,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Add a single contact by hand."""
    try:
        return crud_contact.contact.create_for_event(
            db, obj_in=contact_in, event_id=event.id
        )
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A contact with this email already exists for this event",
        )


@router.post("/events/{eventId}/contacts/import", response_model=ImportSummary)
def import_contacts(
    file: Optional[UploadFile] = File(None),
    mapping: Optional[str] = Form(None),
    default_category: Optional[str] = Form(None, alias="defaultCategory"),
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Bulk import contacts from a CSV or Excel file.

    - **mapping**: optional JSON object of target field to column header,
      e.g. `{"email": "E-mail Address"}`
    - **defaultCategory**: category applied to every imported row
    """
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided"
        )

    field_mapping = None
    if mapping:
        try:
            field_mapping = json.loads(mapping)
        except json.JSONDecodeError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="mapping must be a JSON object",
            )
        if not isinstance(field_mapping, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="mapping must be a JSON object",
            )
        if not all(isinstance(header, str) for header in field_mapping.values()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="mapping values must be column header strings",
            )

    content = file.file.read()
    try:
        rows = contact_import.parse_tabular_file(file.filename, content)
    except ValueError as e:
        # Unsupported extension, or a file pandas cannot read
        logger.warning(f"Could not parse import file {file.filename}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return contact_import.import_contacts(
        db,
        event_id=event.id,
        rows=rows,
        mapping=field_mapping,
        default_category=default_category,
    )


@router.get("/events/{eventId}/contacts/export")
def export_contacts(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    csv_text = contact_export.export_contacts_csv(db, event_id=event.id)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="contacts-{event.id}.csv"'},
    )


@router.get("/events/{eventId}/contacts/{contactId}", response_model=ContactDetail)
def get_contact(
    contactId: str,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """A contact with its registration and email history, newest email first."""
    contact = _get_contact_or_404(db, event.id, contactId)
    logs = crud_email_log.email_log.get_by_contact(db, contact_id=contact.id)
    detail = ContactDetail.model_validate(contact)
    detail.email_logs = [ContactEmailHistoryItem.model_validate(log) for log in logs]
    return detail


@router.patch(
    "/events/{eventId}/contacts/{contactId}", response_model=ContactWithRegistration
)
def update_contact(
    contactId: str,
    contact_in: ContactUpdate,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    contact = _get_contact_or_404(db, event.id, contactId)
    try:
        return crud_contact.contact.update(db, db_obj=contact, obj_in=contact_in)
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A contact with this email already exists for this event",
        )


@router.delete(
    "/events/{eventId}/contacts/{contactId}", status_code=status.HTTP_204_NO_CONTENT
)
def delete_contact(
    contactId: str,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Delete a contact together with its registration and email logs."""
    contact = _get_contact_or_404(db, event.id, contactId)
    crud_contact.contact.remove(db, id=contact.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
