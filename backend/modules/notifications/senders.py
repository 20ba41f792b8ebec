"""
Delivery adapters for email (Resend) and SMS (Twilio).

Both SDKs are synchronous, so calls run in a worker thread to keep the
event loop free.
"""

import asyncio
import logging
from typing import Optional

import resend
from twilio.rest import Client as TwilioClient

from .exceptions import DeliveryError
from .interfaces import IEmailSender, ISmsSender

logger = logging.getLogger(__name__)


class ResendEmailSender(IEmailSender):
    """Sends email through the Resend API."""

    def __init__(self, api_key: str, sender: str):
        self._api_key = api_key
        self._sender = sender

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def send(self, to: str, subject: str, html: str) -> None:
        if not self.is_configured:
            raise DeliveryError("email", "RESEND_API_KEY not configured")

        resend.api_key = self._api_key
        params = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        try:
            result = await asyncio.to_thread(resend.Emails.send, params)
        except Exception as e:
            logger.error(f"Resend rejected email '{subject}' to {to}: {e}")
            raise DeliveryError("email", str(e)) from e

        logger.info(f"Email '{subject}' sent to {to} (id={result.get('id')})")


class TwilioSmsSender(ISmsSender):
    """Sends text messages through Twilio's Messages API."""

    def __init__(self, account_sid: str, auth_token: str, from_number: str):
        self._from_number = from_number
        self._client: Optional[TwilioClient] = None
        if account_sid and auth_token:
            self._client = TwilioClient(account_sid, auth_token)

    @property
    def is_configured(self) -> bool:
        return self._client is not None and bool(self._from_number)

    async def send(self, to: str, body: str) -> None:
        if not self.is_configured:
            raise DeliveryError("sms", "Twilio credentials not configured")

        try:
            message = await asyncio.to_thread(
                self._client.messages.create,
                body=body,
                from_=self._from_number,
                to=to,
            )
        except Exception as e:
            logger.error(f"Twilio rejected SMS to {to}: {e}")
            raise DeliveryError("sms", str(e)) from e

        logger.info(f"SMS sent to {to} (sid={message.sid})")
