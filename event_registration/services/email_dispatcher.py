# event_registration/services/email_dispatcher.py
"""
Sequential bulk email sending with a per-recipient audit log.

Every send goes through a campaign: a direct send from the attendees page
creates one up front, a filtered campaign is reused. Each contact gets at
most one EmailLog per campaign, so re-running a campaign only reaches
contacts that were never attempted. A failed send is logged and counted
and never stops the loop.
"""
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_registration.constants.statuses import (
    CampaignStatus,
    ContactStatus,
    EmailLogStatus,
    EmailTemplateType,
)
from event_registration.core.config import settings
from event_registration.core.email import EmailSendError
from event_registration.crud import contact as crud_contact
from event_registration.crud import email_campaign as crud_campaign
from event_registration.crud import email_log as crud_email_log
from event_registration.crud import email_template as crud_template
from event_registration.crud import event as crud_event
from event_registration.models.contact import Contact
from event_registration.models.email_campaign import EmailCampaign
from event_registration.models.email_template import EmailTemplate
from event_registration.models.event import Event
from event_registration.services.email_renderer import (
    render_email_template,
    render_subject,
)

logger = logging.getLogger(__name__)


def format_event_date(event: Event) -> str:
    if not event.start_date:
        return ""
    return f"{event.start_date:%B} {event.start_date.day}, {event.start_date.year}"


def build_variables(contact: Contact, event: Event) -> dict[str, str]:
    """Placeholder values available to every email template."""
    registration = contact.registration
    return {
        "firstName": contact.first_name or "",
        "lastName": contact.last_name or "",
        "email": contact.email,
        "eventName": event.name,
        "eventDate": format_event_date(event),
        "eventVenue": event.venue or "",
        "registrationLink": f"{settings.app_url}/register/{event.slug}",
        "confirmationCode": registration.confirmation_code if registration else "",
    }


def _record_failure(
    db: Session,
    *,
    campaign_id: str,
    contact_id: str,
    to_email: str,
    subject: str,
    error_message: str,
) -> None:
    try:
        crud_email_log.create_failed(
            db,
            campaign_id=campaign_id,
            contact_id=contact_id,
            to_email=to_email,
            subject=subject,
            error_message=error_message,
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Campaign {campaign_id}: could not log failure for {to_email}: {e}")


def _promote_invited(db: Session, *, template: EmailTemplate, contact: Contact) -> None:
    if (
        template.type != EmailTemplateType.INVITATION.value
        or contact.status != ContactStatus.IMPORTED.value
    ):
        return
    try:
        crud_contact.mark_status(db, contact=contact, status=ContactStatus.INVITED)
    except SQLAlchemyError as e:
        # The email went out and is logged as sent
        db.rollback()
        logger.error(f"Could not mark {contact.email} as invited: {e}")


def _deliver(
    db: Session,
    transport,
    *,
    campaign: EmailCampaign,
    template: EmailTemplate,
    event: Event,
    contacts: list[Contact],
) -> tuple[int, int]:
    campaign_id = campaign.id
    sent_count = 0
    failed_count = 0

    for contact in contacts:
        contact_id = contact.id
        to_email = contact.email
        subject = template.subject
        try:
            if crud_email_log.exists(db, campaign_id=campaign_id, contact_id=contact_id):
                logger.debug(f"Campaign {campaign_id}: {to_email} already attempted, skipping")
                continue

            variables = build_variables(contact, event)
            subject = render_subject(template.subject, variables)
            html = render_email_template(
                template.body_html, template.header_html, template.footer_html, variables
            )

            try:
                result = transport.send(to=to_email, subject=subject, html=html)
            except EmailSendError as e:
                logger.error(f"Failed to send to {to_email}: {e}")
                _record_failure(
                    db,
                    campaign_id=campaign_id,
                    contact_id=contact_id,
                    to_email=to_email,
                    subject=subject,
                    error_message=str(e),
                )
                failed_count += 1
                continue

            crud_email_log.create_sent(
                db,
                campaign_id=campaign_id,
                contact_id=contact_id,
                to_email=to_email,
                subject=subject,
                provider_message_id=(result or {}).get("id"),
            )
        except Exception as e:
            # Unexpected transport or store error: this recipient fails, the batch goes on
            db.rollback()
            logger.exception(f"Campaign {campaign_id}: unexpected error for {to_email}")
            _record_failure(
                db,
                campaign_id=campaign_id,
                contact_id=contact_id,
                to_email=to_email,
                subject=subject,
                error_message=f"{type(e).__name__}: {e}",
            )
            failed_count += 1
            continue

        sent_count += 1
        logger.debug(f"Sent to {to_email}")
        _promote_invited(db, template=template, contact=contact)

    return sent_count, failed_count


def _finish(db: Session, campaign: EmailCampaign) -> None:
    # Totals cover every run of the campaign, not just this one
    counts = crud_email_log.count_by_status(db, campaign_id=campaign.id)
    crud_campaign.mark_completed(
        db,
        campaign=campaign,
        sent_count=counts.get(EmailLogStatus.SENT.value, 0),
        failed_count=counts.get(EmailLogStatus.FAILED.value, 0),
    )


def send_bulk(
    db: Session,
    transport,
    *,
    event_id: str,
    contact_ids: list[str],
    template_id: Optional[str],
) -> dict:
    """
    Sends a template to an explicit list of contacts.

    Returns:
        {"sent_count", "failed_count", "total"}
    """
    if not contact_ids or not template_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="contactIds and templateId are required",
        )

    event = crud_event.get(db, id=event_id)
    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Event not found"
        )

    template = crud_template.get_for_event(db, event_id=event_id, template_id=template_id)
    if not template:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Template not found"
        )

    contacts = crud_contact.get_by_ids(db, event_id=event_id, ids=contact_ids)
    campaign = crud_campaign.create_adhoc(
        db, event_id=event_id, template=template, total_recipients=len(contact_ids)
    )
    logger.info(f"Campaign {campaign.id}: sending '{template.name}' to {len(contacts)} contacts")

    try:
        sent_count, failed_count = _deliver(
            db, transport, campaign=campaign, template=template, event=event, contacts=contacts
        )
    finally:
        # The campaign never stays in SENDING
        _finish(db, campaign)

    logger.info(f"Campaign {campaign.id} completed: {sent_count} sent, {failed_count} failed")
    return {"sent_count": sent_count, "failed_count": failed_count, "total": len(contacts)}


def send_campaign(db: Session, transport, *, event_id: str, campaign_id: str) -> dict:
    """
    Sends a campaign to the contacts matching its recipient filter.

    Contacts already logged against the campaign are skipped, so the
    returned counts only cover this run.
    """
    campaign = crud_campaign.get_for_event(db, event_id=event_id, campaign_id=campaign_id)
    if not campaign:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Campaign not found"
        )
    if campaign.status == CampaignStatus.SENDING.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Campaign is already sending"
        )

    template = campaign.template
    event = campaign.event
    recipient_filter = campaign.recipient_filter or {}
    contacts = crud_contact.get_by_recipient_filter(
        db,
        event_id=event_id,
        category=recipient_filter.get("category"),
        registration_status=recipient_filter.get("registrationStatus"),
    )

    crud_campaign.mark_sending(db, campaign=campaign, total_recipients=len(contacts))
    logger.info(f"Campaign {campaign.id}: found {len(contacts)} recipients")

    try:
        sent_count, failed_count = _deliver(
            db, transport, campaign=campaign, template=template, event=event, contacts=contacts
        )
    finally:
        # The campaign never stays in SENDING
        _finish(db, campaign)

    logger.info(f"Campaign {campaign.id} completed: {sent_count} sent, {failed_count} failed")
    return {"sent_count": sent_count, "failed_count": failed_count, "total": len(contacts)}
