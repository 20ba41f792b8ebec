"""
Subscription module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import (
    GatewayOrder,
    OrderResponse,
    Payment,
    PaymentTimeResponse,
    PaymentVerifiedResponse,
    PlansResponse,
    Subscription,
    VerifyPaymentRequest,
)


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """One subscription row per user."""

    def get_by_user(self, user_id: str) -> Optional[Subscription]:
        ...

    def create(self, subscription: Subscription) -> Subscription:
        ...

    def save(self, subscription: Subscription) -> Subscription:
        ...


@runtime_checkable
class IPaymentRepository(Protocol):
    def create(self, payment: Payment) -> Payment:
        ...

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        ...

    def save(self, payment: Payment) -> Payment:
        ...


@runtime_checkable
class IPaymentGateway(Protocol):
    """External payment provider."""

    @property
    def key_id(self) -> str:
        """Public key handed to the browser checkout."""
        ...

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[dict[str, str]] = None,
    ) -> GatewayOrder:
        """
        Create an order for ``amount`` minor units.

        Raises:
            PaymentGatewayError: If the provider rejects or cannot be reached
        """
        ...

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        ...


@runtime_checkable
class ISubscriptionService(Protocol):
    """
    Interface for plans, payments and the tweet quota gate.

    Every read reconciles the subscription first, so an expired paid plan
    is never observed.
    """

    async def get_subscription(self, user_id: str) -> Subscription:
        """Current subscription, creating a free one on first access."""
        ...

    async def list_plans(self) -> PlansResponse:
        ...

    async def create_order(self, user_id: str, plan_type: str) -> OrderResponse:
        """
        Start a checkout for a paid plan.

        Raises:
            PaymentTimeRestrictedError: Outside the daily payment window
            InvalidPlanError: If the plan is unknown or free
            PaymentGatewayError: If the gateway call fails
        """
        ...

    async def verify_payment(
        self,
        user_id: str,
        request: VerifyPaymentRequest,
    ) -> PaymentVerifiedResponse:
        """
        Confirm a checkout and activate the plan.

        Raises:
            PaymentNotFoundError: If the payment is unknown or not the user's
            PaymentVerificationError: If the signature does not match
        """
        ...

    async def check_payment_time(self) -> PaymentTimeResponse:
        ...

    async def ensure_can_post(self, user_id: str) -> Subscription:
        """
        Tweet gate.

        Raises:
            SubscriptionExpiredError: If the paid period ended
            TweetLimitReachedError: If the quota is spent
        """
        ...

    async def record_tweet(self, user_id: str) -> Subscription:
        """Count one posted tweet against the quota."""
        ...
