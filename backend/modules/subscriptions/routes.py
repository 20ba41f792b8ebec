"""
Subscription endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_subscription_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import ISubscriptionService
from .models import (
    CreateOrderRequest,
    OrderResponse,
    PaymentTimeResponse,
    PaymentVerifiedResponse,
    PlansResponse,
    Subscription,
    VerifyPaymentRequest,
)

router = APIRouter()


@router.get("/my-subscription", response_model=Subscription)
async def my_subscription(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> Subscription:
    return await service.get_subscription(user.id)


@router.get("/plans", response_model=PlansResponse)
async def plans(
    service: ISubscriptionService = Depends(get_subscription_service),
) -> PlansResponse:
    return await service.list_plans()


@router.post("/create-order", response_model=OrderResponse)
async def create_order(
    body: CreateOrderRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> OrderResponse:
    """Start a checkout. Only allowed inside the daily payment window."""
    return await service.create_order(user.id, body.plan_type)


@router.post("/verify-payment", response_model=PaymentVerifiedResponse)
async def verify_payment(
    body: VerifyPaymentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> PaymentVerifiedResponse:
    return await service.verify_payment(user.id, body)


@router.get("/check-payment-time", response_model=PaymentTimeResponse)
async def check_payment_time(
    service: ISubscriptionService = Depends(get_subscription_service),
) -> PaymentTimeResponse:
    return await service.check_payment_time()
