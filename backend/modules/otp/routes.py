"""
Audio-upload OTP endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_otp_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IOTPService
from .models import OTPCheckResponse, OTPRequestResponse, OTPVerifyResponse, VerifyOTPRequest

router = APIRouter()


@router.post("/request", response_model=OTPRequestResponse)
async def request_otp(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IOTPService = Depends(get_otp_service),
) -> OTPRequestResponse:
    """Email a fresh code to the signed-in user."""
    return await service.request_otp(user.id)


@router.post("/verify", response_model=OTPVerifyResponse)
async def verify_otp(
    body: VerifyOTPRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IOTPService = Depends(get_otp_service),
) -> OTPVerifyResponse:
    """Verify a code; the returned ``otp_id`` authorizes one audio upload."""
    return await service.verify_otp(user.id, body.otp)


@router.get("/check", response_model=OTPCheckResponse)
async def check_otp(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IOTPService = Depends(get_otp_service),
) -> OTPCheckResponse:
    return await service.check_verification(user.id)
