"""
Subscriptions module.

Tiered plans with a tweet quota, Razorpay checkout restricted to a daily
payment window, and the gate the tweets module calls before posting.

Public API:
- ISubscriptionService: Interface for plans, payments and the gate
- IPaymentGateway: Interface for the payment provider
- Plan, PLANS, Subscription, Payment: Data models
- reconcile: Lazy downgrade of expired subscriptions
"""

from .exceptions import (
    InvalidPlanError,
    PaymentGatewayError,
    PaymentNotFoundError,
    PaymentTimeRestrictedError,
    PaymentVerificationError,
    SubscriptionExpiredError,
    TweetLimitReachedError,
)
from .interfaces import (
    IPaymentGateway,
    IPaymentRepository,
    ISubscriptionRepository,
    ISubscriptionService,
)
from .models import PLANS, UNLIMITED, Payment, Plan, PlanType, Subscription, reconcile

__all__ = [
    # Interfaces
    "IPaymentGateway",
    "IPaymentRepository",
    "ISubscriptionRepository",
    "ISubscriptionService",
    # Models
    "PLANS",
    "UNLIMITED",
    "Payment",
    "Plan",
    "PlanType",
    "Subscription",
    "reconcile",
    # Exceptions
    "InvalidPlanError",
    "PaymentGatewayError",
    "PaymentNotFoundError",
    "PaymentTimeRestrictedError",
    "PaymentVerificationError",
    "SubscriptionExpiredError",
    "TweetLimitReachedError",
]
