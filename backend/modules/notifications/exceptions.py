"""
Notifications module exceptions.
"""

from shared.exceptions import ExternalServiceError


class DeliveryError(ExternalServiceError):
    """Raised when an email or SMS could not be handed to the provider."""

    def __init__(self, channel: str, message: str):
        super().__init__(
            f"Failed to send {channel}: {message}",
            service=channel,
            code="DELIVERY_FAILED",
        )
        self.channel = channel
