# event_registration/api/v1/endpoints/email_campaigns.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from event_registration.api import deps
from event_registration.core.email import ResendEmailTransport
from event_registration.crud import crud_email_campaign, crud_email_log, crud_email_template
from event_registration.db.session import get_db
from event_registration.models.event import Event as EventModel
from event_registration.schemas.attendee import DispatchResult
from event_registration.schemas.email_campaign import (
    EmailCampaign,
    EmailCampaignCreate,
    EmailCampaignDetail,
    EmailLog,
)
from event_registration.schemas.email_template import EmailTemplate
from event_registration.schemas.token import TokenPayload
from event_registration.services import email_dispatcher

router = APIRouter(tags=["Email Campaigns"])

RECENT_LOGS = 100


def _get_campaign_or_404(db: Session, event_id: str, campaign_id: str):
    campaign = crud_email_campaign.email_campaign.get_for_event(
        db, event_id=event_id, campaign_id=campaign_id
    )
    if not campaign:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Campaign not found"
        )
    return campaign


@router.post(
    "/events/{eventId}/email-campaigns",
    response_model=EmailCampaign,
    status_code=status.HTTP_201_CREATED,
)
def create_email_campaign(
    campaign_in: EmailCampaignCreate,
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Create a DRAFT campaign for a template and a recipient filter."""
    template = crud_email_template.email_template.get_for_event(
        db, event_id=event.id, template_id=campaign_in.template_id
    )
    if not template:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Template not found"
        )
    return crud_email_campaign.email_campaign.create_draft(
        db, obj_in=campaign_in, event_id=event.id
    )


@router.get("/events/{eventId}/email-campaigns", response_model=List[EmailCampaign])
def list_email_campaigns(
    event: EventModel = Depends(deps.get_event_or_404),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud_email_campaign.email_campaign.get_multi_by_event(db, event_id=event.id)


@router.get(
    "/events/{eventId}/email-campaigns/{campaignId}",
    response_model=EmailCampaignDetail,
)
def get_email_campaign(
    eventId: str,
    campaignId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """A campaign with its template and its 100 most recent email logs."""
    campaign = _get_campaign_or_404(db, eventId, campaignId)
    logs = crud_email_log.email_log.get_recent_by_campaign(
        db, campaign_id=campaign.id, limit=RECENT_LOGS
    )
    return EmailCampaignDetail(
        **EmailCampaign.model_validate(campaign).model_dump(),
        template=EmailTemplate.model_validate(campaign.template),
        logs=[EmailLog.model_validate(log) for log in logs],
    )


@router.post(
    "/events/{eventId}/email-campaigns/{campaignId}/send",
    response_model=DispatchResult,
)
def send_email_campaign(
    eventId: str,
    campaignId: str,
    db: Session = Depends(get_db),
    transport: ResendEmailTransport = Depends(deps.get_email_transport),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Send a campaign to its recipient filter. Contacts already emailed by
    this campaign are skipped, so sending again only reaches new matches.
    """
    return email_dispatcher.send_campaign(
        db, transport, event_id=eventId, campaign_id=campaignId
    )


@router.delete(
    "/events/{eventId}/email-campaigns/{campaignId}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_email_campaign(
    eventId: str,
    campaignId: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    campaign = _get_campaign_or_404(db, eventId, campaignId)
    crud_email_campaign.email_campaign.delete(db, campaign=campaign)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
