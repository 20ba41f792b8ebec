"""
Notifications module.

Email and SMS delivery used by the OTP, password-reset and subscription flows.

Public API:
- IEmailSender, ISmsSender: Delivery interfaces
- Mailer: Renders the transactional emails
- ResendEmailSender, TwilioSmsSender: Provider adapters
- DeliveryError: Raised when a provider call fails
"""

from .interfaces import IEmailSender, ISmsSender
from .mailer import Mailer
from .senders import ResendEmailSender, TwilioSmsSender
from .exceptions import DeliveryError

__all__ = [
    "IEmailSender",
    "ISmsSender",
    "Mailer",
    "ResendEmailSender",
    "TwilioSmsSender",
    "DeliveryError",
]
