# event_registration/core/email.py
"""
Outbound email transport backed by Resend.

The transport raises `EmailSendError` on any failure. Bulk callers catch it
per recipient so one bad address never stops a batch.
"""
import logging

import resend

from event_registration.core.config import settings

logger = logging.getLogger(__name__)


class EmailSendError(Exception):
    """Raised when the email provider rejects or fails a send."""


class ResendEmailTransport:
    """Sends a single HTML email through the Resend API."""

    def __init__(self, api_key: str | None = None, default_from: str | None = None):
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.default_from = default_from or settings.EMAIL_FROM

    def send(
        self,
        *,
        to: str,
        subject: str,
        html: str,
        from_email: str | None = None,
    ) -> dict:
        """
        Send one email.

        Returns:
            dict with the provider message `id`
        """
        if not self.api_key:
            raise EmailSendError("RESEND_API_KEY is not configured")

        resend.api_key = self.api_key
        params = {
            "from": from_email or self.default_from,
            "to": [to],
            "subject": subject,
            "html": html,
        }

        try:
            response = resend.Emails.send(params)
        except Exception as e:
            logger.error(f"Resend API error for {to}: {e}")
            raise EmailSendError(str(e)) from e

        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        logger.info(f"[EMAIL] Sent '{subject}' to {to}")
        return {"id": message_id}
