"""
Subscription module exceptions.
"""

from datetime import datetime

from shared.exceptions import (
    ExternalServiceError,
    NotFoundError,
    PolicyDeniedError,
    ValidationError,
)


class PaymentTimeRestrictedError(PolicyDeniedError):
    """Raised when an order is created outside the daily payment window."""

    def __init__(self, window: str, next_available_time: datetime):
        super().__init__(
            f"Payment is only allowed between {window}",
            code="PAYMENT_TIME_RESTRICTED",
            details={
                "payment_time_restriction": True,
                "next_available_time": next_available_time.isoformat(),
            },
        )


class InvalidPlanError(ValidationError):
    def __init__(self, plan_type: str):
        super().__init__(
            "Invalid plan type",
            code="INVALID_PLAN",
            details={"plan_type": plan_type},
        )


class PaymentVerificationError(ValidationError):
    def __init__(self, message: str = "Payment verification failed"):
        super().__init__(message, code="PAYMENT_VERIFICATION_FAILED")


class PaymentNotFoundError(NotFoundError):
    def __init__(self, payment_id: str):
        super().__init__(
            "Payment record not found",
            code="PAYMENT_NOT_FOUND",
            details={"payment_id": payment_id},
        )


class PaymentGatewayError(ExternalServiceError):
    def __init__(self, message: str):
        super().__init__(
            f"Payment gateway error: {message}",
            service="razorpay",
            code="PAYMENT_GATEWAY_ERROR",
        )


class SubscriptionExpiredError(PolicyDeniedError):
    """Raised by the tweet gate when the paid period has ended."""

    def __init__(self):
        super().__init__(
            "Your subscription has expired. Please renew to continue posting.",
            code="SUBSCRIPTION_EXPIRED",
        )


class TweetLimitReachedError(PolicyDeniedError):
    """Raised by the tweet gate when the plan's quota is spent."""

    def __init__(self, plan_name: str, used: int, limit: int):
        super().__init__(
            f"You have reached your tweet limit for the {plan_name}. "
            "Upgrade your plan to post more tweets.",
            code="LIMIT_REACHED",
            details={"plan": plan_name, "used": used, "limit": limit},
        )
