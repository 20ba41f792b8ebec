"""
Subscription and payment repositories.
"""

from typing import Optional

from shared.repository import BaseRepository

from .interfaces import IPaymentRepository, ISubscriptionRepository
from .models import Payment, Subscription


class SupabaseSubscriptionRepository(BaseRepository[Subscription], ISubscriptionRepository):
    table = "subscriptions"
    model = Subscription

    def get_by_user(self, user_id: str) -> Optional[Subscription]:
        result = self._db.table(self.table).select("*").eq("user_id", user_id).execute()
        return self._first(result.data)

    def create(self, subscription: Subscription) -> Subscription:
        return self._insert(subscription)

    def save(self, subscription: Subscription) -> Subscription:
        return self._update(subscription, key="user_id")


class SupabasePaymentRepository(BaseRepository[Payment], IPaymentRepository):
    table = "payments"
    model = Payment

    def create(self, payment: Payment) -> Payment:
        return self._insert(payment)

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        result = self._db.table(self.table).select("*").eq("id", payment_id).execute()
        return self._first(result.data)

    def save(self, payment: Payment) -> Payment:
        return self._update(payment)


class InMemorySubscriptionRepository(ISubscriptionRepository):
    def __init__(self) -> None:
        self._by_user: dict[str, Subscription] = {}

    def get_by_user(self, user_id: str) -> Optional[Subscription]:
        subscription = self._by_user.get(user_id)
        return subscription.model_copy() if subscription else None

    def create(self, subscription: Subscription) -> Subscription:
        self._by_user[subscription.user_id] = subscription.model_copy()
        return subscription

    def save(self, subscription: Subscription) -> Subscription:
        self._by_user[subscription.user_id] = subscription.model_copy()
        return subscription


class InMemoryPaymentRepository(IPaymentRepository):
    def __init__(self) -> None:
        self._payments: dict[str, Payment] = {}

    def create(self, payment: Payment) -> Payment:
        self._payments[payment.id] = payment.model_copy()
        return payment

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        payment = self._payments.get(payment_id)
        return payment.model_copy() if payment else None

    def save(self, payment: Payment) -> Payment:
        self._payments[payment.id] = payment.model_copy()
        return payment
