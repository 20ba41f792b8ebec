"""
Notifications module interfaces.

Other modules depend on these protocols rather than on a delivery SDK so
tests can swap in recording senders.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IEmailSender(Protocol):
    """Delivers a single HTML email."""

    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Send an email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Raises:
            DeliveryError: If the provider rejects or cannot be reached
        """
        ...


@runtime_checkable
class ISmsSender(Protocol):
    """Delivers a single text message."""

    async def send(self, to: str, body: str) -> None:
        """
        Send an SMS.

        Args:
            to: Recipient phone number in E.164 form
            body: Message text

        Raises:
            DeliveryError: If the provider rejects or cannot be reached
        """
        ...
