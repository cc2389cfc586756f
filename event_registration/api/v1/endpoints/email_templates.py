# event_registration/api/v1/endpoints/email_templates.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.crud import crud_email_template
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.email_template import (
    EmailTemplate,
    EmailTemplateCreate,
    EmailTemplateUpdate,
)
from event_registration.schemas.token import TokenPayload

router = APIRouter(tags=["Email Templates"])


def _get_template_or_404(db: Session, event_id: str, template_id: str):
    template = crud_email_template.email_template.get_for_event(
        db, event_id=event_id, template_id=template_id
    )
    if not template:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Template not found"
        )
    return template


@router.post(
    "/events/{eventId}/email-templates",
    response_model=EmailTemplate,
    status_code=status.HTTP_201_CREATED,
)
def create_email_template(
    template_in: EmailTemplateCreate,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud_email_template.email_template.create(
        db, obj_in=template_in, event_id=event.id
    )


@router.get("/events/{eventId}/email-templates", response_model=List[EmailTemplate])
def list_email_templates(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud_email_template.email_template.get_multi_by_event(db, event_id=event.id)


@router.get(
    "/events/{eventId}/email-templates/{templateId}", response_model=EmailTemplate
)
def get_email_template(
    eventId: str,
    templateId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return _get_template_or_404(db, eventId, templateId)


@router.patch(
    "/events/{eventId}/email-templates/{templateId}", response_model=EmailTemplate
)
def update_email_template(
    eventId: str,
    templateId: str,
    template_in: EmailTemplateUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    template = _get_template_or_404(db, eventId, templateId)
    return crud_email_template.email_template.update(
        db, db_obj=template, obj_in=template_in
    )


@router.delete(
    "/events/{eventId}/email-templates/{templateId}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_email_template(
    eventId: str,
    templateId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Deleting a template also deletes the campaigns that used it."""
    template = _get_template_or_404(db, eventId, templateId)
    crud_email_template.email_template.remove(db, id=template.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
