"""
Razorpay payment gateway client.

Orders are created through the Razorpay Orders REST API. Checkout happens in
the browser; the server only verifies the signature Razorpay hands back.
"""

import hashlib
import hmac
import logging
from typing import Optional

import httpx

from .exceptions import PaymentGatewayError
from .interfaces import IPaymentGateway
from .models import GatewayOrder

logger = logging.getLogger(__name__)


def compute_signature(order_id: str, payment_id: str, secret: str) -> str:
    """HMAC-SHA256 of ``order_id|payment_id``, hex encoded."""
    message = f"{order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


class RazorpayGateway(IPaymentGateway):
    """Razorpay orders over httpx with basic auth."""

    ORDERS_URL = "https://api.razorpay.com/v1/orders"

    def __init__(self, key_id: str, key_secret: str):
        self._key_id = key_id
        self._key_secret = key_secret

    @property
    def is_configured(self) -> bool:
        return bool(self._key_id and self._key_secret)

    @property
    def key_id(self) -> str:
        return self._key_id

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[dict[str, str]] = None,
    ) -> GatewayOrder:
        if not self.is_configured:
            raise PaymentGatewayError("Razorpay keys not configured")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.ORDERS_URL,
                    auth=(self._key_id, self._key_secret),
                    json={
                        "amount": amount,
                        "currency": currency,
                        "receipt": receipt,
                        "notes": notes or {},
                    },
                    timeout=30.0,
                )
                response.raise_for_status()
                data = response.json()
        except Exception as e:
            logger.error(f"Razorpay order creation failed: {e}")
            raise PaymentGatewayError(str(e))

        return GatewayOrder(id=data["id"], amount=data["amount"], currency=data["currency"])

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        if not self._key_secret:
            return False
        expected = compute_signature(order_id, payment_id, self._key_secret)
        return hmac.compare_digest(expected, signature or "")
