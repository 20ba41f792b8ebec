"""
Subscription service: plans, checkout and the tweet quota gate.
"""

import logging

from modules.notifications.exceptions import DeliveryError
from modules.notifications.mailer import Mailer
from modules.users.interfaces import IUserRepository
from shared.config import Settings
from shared.schedule import Clock, ScheduledWindow, utc_now

from .exceptions import (
    InvalidPlanError,
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
from .models import (
    PLANS,
    OrderResponse,
    Payment,
    PaymentStatus,
    PaymentTimeResponse,
    PaymentVerifiedResponse,
    PlansResponse,
    PlanType,
    Subscription,
    VerifyPaymentRequest,
    activate_plan,
    reconcile,
)

logger = logging.getLogger(__name__)


class SubscriptionService(ISubscriptionService):
    """Plans and quota backed by a subscription row per user."""

    def __init__(
        self,
        subscriptions: ISubscriptionRepository,
        payments: IPaymentRepository,
        users: IUserRepository,
        gateway: IPaymentGateway,
        mailer: Mailer,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._subscriptions = subscriptions
        self._payments = payments
        self._users = users
        self._gateway = gateway
        self._mailer = mailer
        self._settings = settings
        self._clock = clock
        self._window = ScheduledWindow(
            settings.payment_window_start_hour,
            settings.payment_window_end_hour,
            settings.policy_timezone,
        )

    def _load(self, user_id: str) -> tuple[Subscription, bool]:
        """
        Fetch the user's subscription, provisioning and reconciling it.

        Returns:
            Tuple of (subscription, downgraded)
        """
        now = self._clock()
        subscription = self._subscriptions.get_by_user(user_id)
        if subscription is None:
            subscription = self._subscriptions.create(Subscription.free(user_id, now))
            logger.info(f"Provisioned free subscription for {user_id}")
            return subscription, False

        subscription, downgraded = reconcile(subscription, now)
        if downgraded:
            self._subscriptions.save(subscription)
            logger.info(f"Subscription for {user_id} expired; reverted to free plan")
        return subscription, downgraded

    async def get_subscription(self, user_id: str) -> Subscription:
        subscription, _ = self._load(user_id)
        return subscription

    async def list_plans(self) -> PlansResponse:
        return PlansResponse(
            plans=list(PLANS.values()),
            payment_time_allowed=self._window.is_open(self._clock()),
        )

    async def create_order(self, user_id: str, plan_type: str) -> OrderResponse:
        now = self._clock()
        if not self._window.is_open(now):
            raise PaymentTimeRestrictedError(self._window.describe(), self._window.next_opening(now))

        try:
            plan = PLANS[PlanType(plan_type)]
        except ValueError:
            raise InvalidPlanError(plan_type)
        if not plan.is_paid:
            raise InvalidPlanError(plan_type)

        receipt = f"order_{int(now.timestamp() * 1000)}"
        order = await self._gateway.create_order(
            amount=plan.amount,
            currency=self._settings.payment_currency,
            receipt=receipt,
            notes={"user_id": user_id, "plan_type": plan.id.value, "plan_name": plan.name},
        )

        payment = Payment(
            user_id=user_id,
            order_id=receipt,
            razorpay_order_id=order.id,
            plan_type=plan.id,
            amount=plan.display_amount,
            currency=order.currency,
            created_at=now,
        )
        self._payments.create(payment)
        logger.info(f"Created order {order.id} for {user_id} ({plan.id.value})")

        return OrderResponse(
            order_id=order.id,
            amount=order.amount,
            currency=order.currency,
            payment_id=payment.id,
            key=self._gateway.key_id,
        )

    async def verify_payment(
        self,
        user_id: str,
        request: VerifyPaymentRequest,
    ) -> PaymentVerifiedResponse:
        payment = self._payments.get_by_id(request.payment_id)
        if payment is None or payment.user_id != user_id:
            raise PaymentNotFoundError(request.payment_id)
        if payment.status == PaymentStatus.SUCCESS:
            raise PaymentVerificationError("Payment already verified")

        signature_ok = self._gateway.verify_signature(
            request.razorpay_order_id,
            request.razorpay_payment_id,
            request.razorpay_signature,
        )
        if not signature_ok or request.razorpay_order_id != payment.razorpay_order_id:
            payment.status = PaymentStatus.FAILED
            self._payments.save(payment)
            logger.warning(f"Payment signature mismatch for {user_id} on {payment.id}")
            raise PaymentVerificationError()

        now = self._clock()
        payment.razorpay_payment_id = request.razorpay_payment_id
        payment.razorpay_signature = request.razorpay_signature
        payment.status = PaymentStatus.SUCCESS
        payment.payment_date = now
        self._payments.save(payment)

        plan = PLANS[payment.plan_type]
        current, _ = self._load(user_id)
        subscription = activate_plan(
            current,
            plan,
            request.razorpay_order_id,
            request.razorpay_payment_id,
            now,
        )
        self._subscriptions.save(subscription)
        logger.info(f"Activated {plan.id.value} plan for {user_id}")

        user = self._users.get_by_id(user_id)
        if user:
            try:
                await self._mailer.send_subscription_invoice(
                    user.email,
                    user.name,
                    plan.name,
                    plan.display_amount,
                    plan.tweets_limit,
                    subscription.end_date,
                    payment.order_id,
                    payment.razorpay_payment_id,
                    now,
                )
            except DeliveryError as e:
                logger.warning(f"Invoice email for {user_id} not sent: {e.message}")

        return PaymentVerifiedResponse(subscription=subscription)

    async def check_payment_time(self) -> PaymentTimeResponse:
        now = self._clock()
        allowed = self._window.is_open(now)
        window = self._window.describe()
        return PaymentTimeResponse(
            payment_allowed=allowed,
            current_time=self._window.local_time(now).strftime("%b %d, %Y, %I:%M %p"),
            timezone=self._settings.policy_timezone,
            next_available_time=self._window.next_opening(now),
            message=(
                f"Payment is currently available ({window})"
                if allowed
                else f"Payment is only allowed between {window}"
            ),
        )

    async def ensure_can_post(self, user_id: str) -> Subscription:
        subscription, downgraded = self._load(user_id)
        if downgraded:
            raise SubscriptionExpiredError()
        if not subscription.can_post_tweet(self._clock()):
            raise TweetLimitReachedError(
                subscription.plan_name,
                subscription.tweets_used,
                subscription.tweets_limit,
            )
        return subscription

    async def record_tweet(self, user_id: str) -> Subscription:
        subscription, _ = self._load(user_id)
        subscription.tweets_used += 1
        subscription.updated_at = self._clock()
        self._subscriptions.save(subscription)
        return subscription
