"""Tests for plan and subscription rules."""

from datetime import datetime, timedelta, timezone

from modules.subscriptions.models import (
    PLANS,
    UNLIMITED,
    PlanType,
    Subscription,
    SubscriptionPaymentStatus,
    activate_plan,
    reconcile,
)

NOW = datetime(2026, 3, 2, 5, 0, tzinfo=timezone.utc)


class TestPlans:
    def test_catalogue(self):
        assert [p.id for p in PLANS.values()] == [
            PlanType.FREE,
            PlanType.BRONZE,
            PlanType.SILVER,
            PlanType.GOLD,
        ]
        assert PLANS[PlanType.BRONZE].amount == 100 * PLANS[PlanType.BRONZE].display_amount
        assert PLANS[PlanType.GOLD].tweets_limit == UNLIMITED
        assert not PLANS[PlanType.FREE].is_paid


class TestSubscription:
    def test_free_defaults(self):
        subscription = Subscription.free("user-1", NOW)
        assert subscription.tweets_limit == 1
        assert subscription.end_date is None
        assert subscription.remaining == 1
        assert subscription.can_post_tweet(NOW + timedelta(days=400))

    def test_quota_exhausted(self):
        subscription = Subscription.free("user-1", NOW)
        subscription.tweets_used = 1
        assert not subscription.can_post_tweet(NOW)
        assert subscription.remaining == 0

    def test_unlimited(self):
        subscription = activate_plan(Subscription.free("u", NOW), PLANS[PlanType.GOLD], "o", "p", NOW)
        subscription.tweets_used = 10_000
        assert subscription.can_post_tweet(NOW)
        assert subscription.remaining == UNLIMITED

    def test_expiry_is_strict(self):
        subscription = activate_plan(Subscription.free("u", NOW), PLANS[PlanType.BRONZE], "o", "p", NOW)
        assert not subscription.is_expired(subscription.end_date)
        assert subscription.is_expired(subscription.end_date + timedelta(seconds=1))


class TestActivatePlan:
    def test_fresh_period(self):
        current = Subscription.free("u", NOW)
        current.tweets_used = 1

        active = activate_plan(current, PLANS[PlanType.SILVER], "order_1", "pay_1", NOW)

        assert active.plan_type == PlanType.SILVER
        assert active.tweets_limit == 5
        assert active.tweets_used == 0
        assert active.amount == 300
        assert active.end_date == NOW + timedelta(days=30)
        assert active.payment_status == SubscriptionPaymentStatus.COMPLETED
        assert active.razorpay_payment_id == "pay_1"
        assert current.plan_type == PlanType.FREE


class TestReconcile:
    def test_active_plan_untouched(self):
        active = activate_plan(Subscription.free("u", NOW), PLANS[PlanType.BRONZE], "o", "p", NOW)
        result, changed = reconcile(active, NOW + timedelta(days=29))
        assert not changed
        assert result is active

    def test_expired_plan_downgraded(self):
        active = activate_plan(Subscription.free("u", NOW), PLANS[PlanType.BRONZE], "o", "p", NOW)
        active.tweets_used = 3
        later = NOW + timedelta(days=31)

        result, changed = reconcile(active, later)

        assert changed
        assert result.plan_type == PlanType.FREE
        assert result.tweets_limit == 1
        assert result.tweets_used == 0
        assert result.end_date is None
        assert result.start_date == later
        assert active.plan_type == PlanType.BRONZE

    def test_free_never_expires(self):
        _, changed = reconcile(Subscription.free("u", NOW), NOW + timedelta(days=3650))
        assert not changed
