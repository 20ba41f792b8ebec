"""
Password reset endpoints. None of them require authentication.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import EmailStr

from api.dependencies import get_password_reset_service
from shared.models import MessageResponse

from .interfaces import IPasswordResetService
from .models import (
    PasswordResetRequest,
    PasswordResetRequested,
    ResetAvailability,
    ResetPasswordRequest,
    ResetTokenInfo,
)

router = APIRouter()


@router.post("/request", response_model=PasswordResetRequested)
async def request_reset(
    body: PasswordResetRequest,
    service: IPasswordResetService = Depends(get_password_reset_service),
) -> PasswordResetRequested:
    """Email a temporary password and reset link. Limited to once per day."""
    return await service.request_reset(body.email)


@router.get("/verify/{token}", response_model=ResetTokenInfo)
async def verify_token(
    token: str,
    service: IPasswordResetService = Depends(get_password_reset_service),
) -> ResetTokenInfo:
    return await service.verify_token(token)


@router.post("/reset/{token}", response_model=MessageResponse)
async def reset_password(
    token: str,
    body: ResetPasswordRequest,
    service: IPasswordResetService = Depends(get_password_reset_service),
) -> MessageResponse:
    await service.reset_password(token, body)
    return MessageResponse(
        message="Password has been reset successfully. You can now login with your new password."
    )


@router.get("/check-availability", response_model=ResetAvailability)
async def check_availability(
    email: EmailStr = Query(...),
    service: IPasswordResetService = Depends(get_password_reset_service),
) -> ResetAvailability:
    return await service.check_availability(email)
