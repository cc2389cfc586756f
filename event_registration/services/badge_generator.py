# event_registration/services/badge_generator.py
"""
QR-coded attendee badges.

A badge is a fixed 400x600 HTML page. Its QR code encodes the public
badge URL of the registration's confirmation code.
"""
import base64
import io
import logging
from dataclasses import dataclass
from html import escape
from typing import Optional

import qrcode
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from event_registration.core.config import settings
from event_registration.core.email import EmailSendError
from event_registration.crud import badge as crud_badge
from event_registration.crud import badge_template as crud_badge_template
from event_registration.crud import registration as crud_registration
from event_registration.models.event import Event
from event_registration.models.registration import Registration

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_LABEL = "Attendee"

# Category pill colors, keyed by upper-cased category name
CATEGORY_STYLES = {
    "VIP": "background: #e94560;",
    "SPEAKER": "background: #533483;",
    "SPONSOR": "background: #f5a623; color: #1a1a2e;",
}
DEFAULT_CATEGORY_STYLE = (
    "background: rgba(255,255,255,0.2); border: 1px solid rgba(255,255,255,0.3);"
)


@dataclass
class BadgeData:
    first_name: str
    last_name: str
    email: str
    event_name: str
    confirmation_code: str
    organization: Optional[str] = None
    designation: Optional[str] = None
    category: Optional[str] = None
    qr_code_data_url: Optional[str] = None

    @classmethod
    def from_registration(cls, registration: Registration, event: Event, qr_code_data_url: Optional[str] = None):
        contact = registration.contact
        return cls(
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            organization=contact.organization,
            designation=contact.designation,
            category=contact.category,
            event_name=event.name,
            confirmation_code=registration.confirmation_code,
            qr_code_data_url=qr_code_data_url,
        )


def badge_url(confirmation_code: str) -> str:
    return f"{settings.app_url}/badge/{confirmation_code}"


def generate_qr_code(data: str) -> str:
    """Encodes `data` as a QR code and returns a base64 PNG data URL."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=8,
        border=1,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = io.BytesIO()
    img.save(buffered, format="PNG")
    encoded = base64.b64encode(buffered.getvalue()).decode()
    return f"data:image/png;base64,{encoded}"


def _category_class(category: Optional[str]) -> str:
    key = category.upper() if category else ""
    return key if key in CATEGORY_STYLES else "default"


def generate_badge_html(data: BadgeData) -> str:
    category_rules = "\n".join(
        f"    .category-{name} {{ {style} }}" for name, style in CATEGORY_STYLES.items()
    )
    organization = (
        f'<div class="organization">{escape(data.organization)}</div>' if data.organization else ""
    )
    designation = (
        f'<div class="designation">{escape(data.designation)}</div>' if data.designation else ""
    )
    qr_image = (
        f'<img src="{data.qr_code_data_url}" alt="QR Code" />' if data.qr_code_data_url else ""
    )

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    * {{ margin: 0; padding: 0; box-sizing: border-box; }}
    body {{ font-family: 'Segoe UI', sans-serif; }}
    .badge {{
      width: 400px;
      height: 600px;
      background: linear-gradient(135deg, #1a1a2e 0%, #16213e 50%, #0f3460 100%);
      color: white;
      display: flex;
      flex-direction: column;
      align-items: center;
      justify-content: space-between;
      padding: 30px;
    }}
    .event-name {{ font-size: 14px; text-transform: uppercase; letter-spacing: 3px; opacity: 0.8; text-align: center; }}
    .attendee-info {{ text-align: center; }}
    .name {{ font-size: 28px; font-weight: 700; margin-bottom: 8px; }}
    .organization {{ font-size: 16px; opacity: 0.8; margin-bottom: 4px; }}
    .designation {{ font-size: 14px; opacity: 0.6; }}
    .category-badge {{
      display: inline-block;
      padding: 6px 20px;
      border-radius: 20px;
      font-size: 12px;
      font-weight: 600;
      text-transform: uppercase;
      letter-spacing: 2px;
    }}
{category_rules}
    .category-default {{ {DEFAULT_CATEGORY_STYLE} }}
    .qr-section {{ text-align: center; }}
    .qr-code {{ background: white; padding: 10px; border-radius: 10px; display: inline-block; }}
    .qr-code img {{ display: block; width: 120px; height: 120px; }}
    .conf-code {{ margin-top: 8px; font-size: 11px; opacity: 0.6; font-family: monospace; }}
  </style>
</head>
<body>
  <div class="badge">
    <div class="event-name">{escape(data.event_name)}</div>
    <div class="attendee-info">
      <div class="name">{escape(data.first_name)} {escape(data.last_name)}</div>
      {organization}
      {designation}
    </div>
    <div class="category-badge category-{_category_class(data.category)}">
      {escape(data.category or DEFAULT_CATEGORY_LABEL)}
    </div>
    <div class="qr-section">
      <div class="qr-code">
        {qr_image}
      </div>
      <div class="conf-code">{escape(data.confirmation_code)}</div>
    </div>
  </div>
</body>
</html>"""


def render_badge_page(registration: Registration) -> str:
    """The public badge page of one registration, QR code included."""
    qr_code_data_url = generate_qr_code(badge_url(registration.confirmation_code))
    data = BadgeData.from_registration(registration, registration.event, qr_code_data_url)
    return generate_badge_html(data)


def generate_badges(
    db: Session, *, event_id: str, registration_ids: Optional[list[str]] = None
) -> dict:
    """
    Builds or refreshes the badge of every confirmed registration, or only
    of `registration_ids` when given.

    A failure on one registration is logged and counted, the rest of the
    batch still runs.
    """
    template = crud_badge_template.get_or_create_default(db, event_id=event_id)
    registrations = crud_registration.get_confirmed(
        db, event_id=event_id, ids=registration_ids
    )

    generated = 0
    failed = 0
    for registration in registrations:
        try:
            crud_badge.upsert_for_registration(
                db,
                registration=registration,
                template=template,
                qr_code_data=badge_url(registration.confirmation_code),
            )
            crud_registration.mark_badge_generated(db, registration=registration)
            generated += 1
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Badge generation failed for registration {registration.id}: {e}")
            failed += 1

    logger.info(f"Event {event_id}: generated {generated} badges, {failed} failed")
    return {"generated": generated, "failed": failed, "total": len(registrations)}


def badge_email_html(first_name: str, event_name: str, confirmation_code: str) -> str:
    link = escape(badge_url(confirmation_code))
    return f"""
<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2>Hello {escape(first_name)},</h2>
  <p>Your e-badge for <strong>{escape(event_name)}</strong> is ready!</p>
  <p>You can view and download your badge using the link below:</p>
  <p style="text-align: center; margin: 30px 0;">
    <a href="{link}"
       style="background-color: #1a1a2e; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block;">
      View My Badge
    </a>
  </p>
  <p>Your confirmation code: <strong>{escape(confirmation_code)}</strong></p>
  <p style="color: #666; font-size: 14px;">
    Please bring this badge (printed or on your device) to the event for check-in.
  </p>
</div>
"""


def send_badges(db: Session, transport, *, event: Event) -> dict:
    """Emails the badge link to every confirmed registration with a generated badge."""
    registrations = crud_registration.get_confirmed(
        db, event_id=event.id, badge_generated=True
    )

    sent = 0
    failed = 0
    for registration in registrations:
        contact = registration.contact
        try:
            transport.send(
                to=contact.email,
                subject=f"Your E-Badge for {event.name}",
                html=badge_email_html(
                    contact.first_name, event.name, registration.confirmation_code
                ),
            )
            sent += 1
        except EmailSendError as e:
            logger.error(f"Failed to send badge to {contact.email}: {e}")
            failed += 1

    return {"sent": sent, "failed": failed, "total": len(registrations)}
