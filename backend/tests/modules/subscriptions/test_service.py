"""Tests for plans, checkout and the tweet quota gate."""

from datetime import timedelta

import pytest

from modules.subscriptions.exceptions import (
    InvalidPlanError,
    PaymentNotFoundError,
    PaymentTimeRestrictedError,
    PaymentVerificationError,
    SubscriptionExpiredError,
    TweetLimitReachedError,
)
from modules.subscriptions.gateway import compute_signature
from modules.subscriptions.models import (
    PaymentStatus,
    PlanType,
    VerifyPaymentRequest,
)
from tests.conftest import TEST_GATEWAY_SECRET, local_time


@pytest.fixture
def service(container):
    return container.subscriptions


@pytest.fixture
def payment_window(clock):
    clock.set(local_time(10, 15))
    return clock


def signed(order, razorpay_payment_id="pay_rzp_1"):
    return VerifyPaymentRequest(
        razorpay_order_id=order.order_id,
        razorpay_payment_id=razorpay_payment_id,
        razorpay_signature=compute_signature(order.order_id, razorpay_payment_id, TEST_GATEWAY_SECRET),
        payment_id=order.payment_id,
    )


async def buy(service, user_id, plan="bronze"):
    order = await service.create_order(user_id, plan)
    return await service.verify_payment(user_id, signed(order))


class TestSubscription:
    @pytest.mark.asyncio
    async def test_free_plan_provisioned_on_first_read(self, service, container, alice):
        subscription = await service.get_subscription(alice.id)
        assert subscription.plan_type == PlanType.FREE
        assert container.subscription_repository.get_by_user(alice.id) is not None

    @pytest.mark.asyncio
    async def test_list_plans_reports_window(self, service, clock):
        plans = await service.list_plans()
        assert len(plans.plans) == 4
        assert plans.payment_time_allowed is False

        clock.set(local_time(10, 0))
        assert (await service.list_plans()).payment_time_allowed is True


class TestPaymentWindow:
    @pytest.mark.asyncio
    async def test_order_outside_window(self, service, payment_gateway, alice):
        with pytest.raises(PaymentTimeRestrictedError) as exc_info:
            await service.create_order(alice.id, "bronze")
        assert exc_info.value.code == "PAYMENT_TIME_RESTRICTED"
        assert exc_info.value.details["next_available_time"] == local_time(10, 0, day=3).isoformat()
        assert payment_gateway.orders == []

    @pytest.mark.asyncio
    async def test_window_end_is_exclusive(self, service, clock, alice):
        clock.set(local_time(11, 0))
        with pytest.raises(PaymentTimeRestrictedError):
            await service.create_order(alice.id, "bronze")

    @pytest.mark.asyncio
    async def test_check_payment_time(self, service, clock):
        closed = await service.check_payment_time()
        assert closed.payment_allowed is False
        assert closed.timezone == "Asia/Kolkata"
        assert closed.current_time == "Mar 02, 2026, 11:30 AM"

        clock.set(local_time(9, 0))
        early = await service.check_payment_time()
        assert early.next_available_time == local_time(10, 0)


class TestCheckout:
    @pytest.mark.asyncio
    async def test_create_order(self, service, payment_gateway, payment_window, container, alice):
        order = await service.create_order(alice.id, "silver")

        assert order.amount == 30000
        assert order.currency == "INR"
        assert order.key == "rzp_test_key"
        assert payment_gateway.orders[0]["receipt"].startswith("order_")
        payment = container.payment_repository.get_by_id(order.payment_id)
        assert payment.status == PaymentStatus.CREATED
        assert payment.amount == 300

    @pytest.mark.asyncio
    @pytest.mark.parametrize("plan", ["free", "platinum"])
    async def test_invalid_plan(self, service, payment_window, alice, plan):
        with pytest.raises(InvalidPlanError):
            await service.create_order(alice.id, plan)

    @pytest.mark.asyncio
    async def test_verify_activates_plan_and_emails_invoice(
        self, service, payment_window, email_sender, container, alice
    ):
        order = await service.create_order(alice.id, "bronze")
        response = await service.verify_payment(alice.id, signed(order))

        subscription = response.subscription
        assert subscription.plan_type == PlanType.BRONZE
        assert subscription.tweets_limit == 3
        assert subscription.end_date == payment_window() + timedelta(days=30)
        assert container.payment_repository.get_by_id(order.payment_id).status == PaymentStatus.SUCCESS
        assert email_sender.sent[-1]["subject"] == "Payment Successful - Bronze Plan Subscription"

    @pytest.mark.asyncio
    async def test_bad_signature_marks_failed(self, service, payment_window, container, alice):
        order = await service.create_order(alice.id, "bronze")
        request = signed(order).model_copy(update={"razorpay_signature": "forged"})

        with pytest.raises(PaymentVerificationError):
            await service.verify_payment(alice.id, request)

        assert container.payment_repository.get_by_id(order.payment_id).status == PaymentStatus.FAILED
        assert (await service.get_subscription(alice.id)).plan_type == PlanType.FREE

    @pytest.mark.asyncio
    async def test_order_id_must_match_payment(self, service, payment_window, alice):
        first = await service.create_order(alice.id, "bronze")
        second = await service.create_order(alice.id, "gold")
        request = signed(second).model_copy(update={"payment_id": first.payment_id})

        with pytest.raises(PaymentVerificationError):
            await service.verify_payment(alice.id, request)

    @pytest.mark.asyncio
    async def test_already_verified(self, service, payment_window, alice):
        order = await service.create_order(alice.id, "bronze")
        await service.verify_payment(alice.id, signed(order))
        with pytest.raises(PaymentVerificationError, match="already verified"):
            await service.verify_payment(alice.id, signed(order))

    @pytest.mark.asyncio
    async def test_other_users_payment(self, service, payment_window, alice, bob):
        order = await service.create_order(alice.id, "bronze")
        with pytest.raises(PaymentNotFoundError):
            await service.verify_payment(bob.id, signed(order))

    @pytest.mark.asyncio
    async def test_invoice_failure_does_not_fail_payment(self, container, payment_window, alice):
        from modules.notifications.mailer import Mailer
        from modules.subscriptions.service import SubscriptionService
        from tests.conftest import RecordingEmailSender

        service = SubscriptionService(
            container.subscription_repository,
            container.payment_repository,
            container.user_repository,
            container.payment_gateway,
            Mailer(RecordingEmailSender(fail=True), "Chirp", "http://localhost:3000"),
            container.settings,
            container.clock,
        )
        order = await service.create_order(alice.id, "gold")
        response = await service.verify_payment(alice.id, signed(order))
        assert response.subscription.plan_type == PlanType.GOLD


class TestTweetGate:
    @pytest.mark.asyncio
    async def test_free_plan_allows_one(self, service, alice):
        await service.ensure_can_post(alice.id)
        await service.record_tweet(alice.id)

        with pytest.raises(TweetLimitReachedError) as exc_info:
            await service.ensure_can_post(alice.id)
        assert exc_info.value.details == {"plan": "Free Plan", "used": 1, "limit": 1}

    @pytest.mark.asyncio
    async def test_gold_is_unlimited(self, service, payment_window, alice):
        await buy(service, alice.id, "gold")
        for _ in range(20):
            await service.ensure_can_post(alice.id)
            await service.record_tweet(alice.id)

    @pytest.mark.asyncio
    async def test_expired_plan_downgraded_then_refused(self, service, payment_window, alice):
        await buy(service, alice.id, "silver")
        payment_window.advance(days=30, seconds=1)

        with pytest.raises(SubscriptionExpiredError):
            await service.ensure_can_post(alice.id)

        subscription = await service.get_subscription(alice.id)
        assert subscription.plan_type == PlanType.FREE
        assert subscription.tweets_used == 0
        await service.ensure_can_post(alice.id)

    @pytest.mark.asyncio
    async def test_upgrade_resets_usage(self, service, payment_window, alice):
        await service.record_tweet(alice.id)
        response = await buy(service, alice.id, "bronze")
        assert response.subscription.tweets_used == 0
        assert response.subscription.remaining == 3
