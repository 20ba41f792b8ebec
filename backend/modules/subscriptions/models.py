"""
Subscription module data models.

Plans, the per-user subscription with its tweet quota, and gateway payments.
Amounts sent to the gateway are in paise; ``display_amount`` is rupees.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, Field

from shared.schedule import utc_now

UNLIMITED = -1
PLAN_VALIDITY = relativedelta(days=30)


class PlanType(str, Enum):
    FREE = "free"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


class Plan(BaseModel):
    id: PlanType
    name: str
    amount: int = Field(..., description="Price in paise")
    display_amount: int = Field(..., description="Price in rupees")
    tweets_limit: int = Field(..., description="Tweets per period, -1 for unlimited")
    features: list[str] = Field(default_factory=list)

    @property
    def is_paid(self) -> bool:
        return self.amount > 0


PLANS: dict[PlanType, Plan] = {
    PlanType.FREE: Plan(
        id=PlanType.FREE,
        name="Free Plan",
        amount=0,
        display_amount=0,
        tweets_limit=1,
        features=["1 tweet per month", "Basic features", "Community support"],
    ),
    PlanType.BRONZE: Plan(
        id=PlanType.BRONZE,
        name="Bronze Plan",
        amount=10000,
        display_amount=100,
        tweets_limit=3,
        features=["3 tweets per month", "Audio tweets", "Priority support", "30 days validity"],
    ),
    PlanType.SILVER: Plan(
        id=PlanType.SILVER,
        name="Silver Plan",
        amount=30000,
        display_amount=300,
        tweets_limit=5,
        features=[
            "5 tweets per month",
            "Audio tweets",
            "Priority support",
            "Advanced analytics",
            "30 days validity",
        ],
    ),
    PlanType.GOLD: Plan(
        id=PlanType.GOLD,
        name="Gold Plan",
        amount=100000,
        display_amount=1000,
        tweets_limit=UNLIMITED,
        features=[
            "Unlimited tweets",
            "Audio tweets",
            "Priority support",
            "Advanced analytics",
            "Verified badge",
            "30 days validity",
        ],
    ),
}


class PaymentStatus(str, Enum):
    CREATED = "created"
    SUCCESS = "success"
    FAILED = "failed"


class SubscriptionPaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Subscription(BaseModel):
    """
    A user's current plan and how much of its quota is spent.

    Free plans never expire (``end_date`` is None). Paid plans last 30 days
    and are downgraded to free lazily, on the next read after expiry.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    plan_type: PlanType = PlanType.FREE
    plan_name: str = "Free Plan"
    amount: int = 0
    tweets_limit: int = 1
    tweets_used: int = 0
    is_active: bool = True
    start_date: datetime = Field(default_factory=utc_now)
    end_date: Optional[datetime] = None
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    payment_status: SubscriptionPaymentStatus = SubscriptionPaymentStatus.PENDING
    last_payment_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def free(cls, user_id: str, now: datetime) -> "Subscription":
        return cls(user_id=user_id, start_date=now, created_at=now, updated_at=now)

    @property
    def is_unlimited(self) -> bool:
        return self.tweets_limit == UNLIMITED

    @property
    def remaining(self) -> int:
        if self.is_unlimited:
            return UNLIMITED
        return max(self.tweets_limit - self.tweets_used, 0)

    def is_expired(self, now: datetime) -> bool:
        return self.end_date is not None and now > self.end_date

    def can_post_tweet(self, now: datetime) -> bool:
        if self.is_expired(now):
            return False
        return self.is_unlimited or self.tweets_used < self.tweets_limit


def reconcile(subscription: Subscription, now: datetime) -> tuple[Subscription, bool]:
    """
    Downgrade an expired subscription to the free plan.

    Returns:
        Tuple of (subscription, changed). The input is never mutated.
    """
    if not subscription.is_expired(now):
        return subscription, False

    free = PLANS[PlanType.FREE]
    downgraded = subscription.model_copy(
        update={
            "plan_type": PlanType.FREE,
            "plan_name": free.name,
            "amount": free.display_amount,
            "tweets_limit": free.tweets_limit,
            "tweets_used": 0,
            "is_active": True,
            "start_date": now,
            "end_date": None,
            "payment_status": SubscriptionPaymentStatus.PENDING,
            "updated_at": now,
        }
    )
    return downgraded, True


def activate_plan(
    subscription: Subscription,
    plan: Plan,
    order_id: str,
    payment_id: str,
    now: datetime,
) -> Subscription:
    """Switch to a paid plan for a fresh 30-day period with zero usage."""
    return subscription.model_copy(
        update={
            "plan_type": plan.id,
            "plan_name": plan.name,
            "amount": plan.display_amount,
            "tweets_limit": plan.tweets_limit,
            "tweets_used": 0,
            "is_active": True,
            "start_date": now,
            "end_date": now + PLAN_VALIDITY,
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "payment_status": SubscriptionPaymentStatus.COMPLETED,
            "last_payment_date": now,
            "updated_at": now,
        }
    )


class Payment(BaseModel):
    """One gateway order and its outcome."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    order_id: str = Field(..., description="Our receipt id")
    razorpay_order_id: str
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    plan_type: PlanType
    amount: int = Field(..., description="Price in rupees")
    currency: str = "INR"
    status: PaymentStatus = PaymentStatus.CREATED
    payment_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)


class GatewayOrder(BaseModel):
    id: str
    amount: int
    currency: str


class PlansResponse(BaseModel):
    plans: list[Plan]
    payment_time_allowed: bool


class CreateOrderRequest(BaseModel):
    plan_type: str


class OrderResponse(BaseModel):
    order_id: str
    amount: int
    currency: str
    payment_id: str
    key: str


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
    payment_id: str


class PaymentVerifiedResponse(BaseModel):
    message: str = "Payment verified successfully"
    success: bool = True
    subscription: Subscription


class PaymentTimeResponse(BaseModel):
    payment_allowed: bool
    current_time: str
    timezone: str
    next_available_time: datetime
    message: str
