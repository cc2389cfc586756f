from unittest.mock import MagicMock

from event_registration.constants.statuses import CampaignStatus
from event_registration.crud.crud_email_campaign import CRUDEmailCampaign
from event_registration.models.email_campaign import EmailCampaign
from event_registration.models.email_template import EmailTemplate
from event_registration.schemas.email_campaign import EmailCampaignCreate, RecipientFilter

campaign_crud = CRUDEmailCampaign()


def test_create_adhoc_starts_in_sending():
    db_session = MagicMock()
    template = EmailTemplate(id="tpl_abc", name="Invitation")

    campaign = campaign_crud.create_adhoc(
        db=db_session, event_id="evt_abc", template=template, total_recipients=3
    )

    db_session.add.assert_called_once_with(campaign)
    db_session.commit.assert_called_once()
    assert campaign.status == CampaignStatus.SENDING.value
    assert campaign.total_recipients == 3
    assert campaign.name.startswith("Invitation - ")


def test_create_draft_stores_filter_with_camelcase_keys():
    db_session = MagicMock()
    campaign_in = EmailCampaignCreate(
        name="Reminder to registered",
        template_id="tpl_abc",
        recipient_filter=RecipientFilter(category="VIP", registrationStatus="CONFIRMED"),
    )

    campaign = campaign_crud.create_draft(db=db_session, obj_in=campaign_in, event_id="evt_abc")

    assert campaign.status == CampaignStatus.DRAFT.value
    assert campaign.recipient_filter == {"category": "VIP", "registrationStatus": "CONFIRMED"}


def test_mark_completed_sets_counts_and_timestamp():
    db_session = MagicMock()
    campaign = EmailCampaign(id="cmp_abc", status=CampaignStatus.SENDING.value)

    campaign_crud.mark_completed(db=db_session, campaign=campaign, sent_count=5, failed_count=1)

    assert campaign.status == CampaignStatus.COMPLETED.value
    assert campaign.sent_count == 5
    assert campaign.failed_count == 1
    assert campaign.sent_at is not None
    db_session.commit.assert_called_once()
