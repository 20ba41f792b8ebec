"""
Language preference endpoints.

All routes require authentication.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_language_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import ILanguageService
from .models import (
    CurrentLanguageResponse,
    LanguageChangedResponse,
    LanguageChangeRequest,
    LanguageChangeResponse,
    PhoneUpdatedResponse,
    UpdatePhoneRequest,
    VerifyLanguageOTPRequest,
)

router = APIRouter()


@router.get("/current", response_model=CurrentLanguageResponse)
async def current_language(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILanguageService = Depends(get_language_service),
) -> CurrentLanguageResponse:
    return await service.get_current(user.id)


@router.post("/request-change", response_model=LanguageChangeResponse)
async def request_change(
    body: LanguageChangeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILanguageService = Depends(get_language_service),
) -> LanguageChangeResponse:
    """
    Request a language change.

    English applies immediately. French sends a code by email; the other
    languages send a code by SMS to ``phone_number``.
    """
    return await service.request_change(user.id, body.language, body.phone_number)


@router.post("/verify-otp", response_model=LanguageChangedResponse)
async def verify_otp(
    body: VerifyLanguageOTPRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILanguageService = Depends(get_language_service),
) -> LanguageChangedResponse:
    return await service.verify_otp(user.id, body.otp, body.language)


@router.post("/update-phone", response_model=PhoneUpdatedResponse)
async def update_phone(
    body: UpdatePhoneRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ILanguageService = Depends(get_language_service),
) -> PhoneUpdatedResponse:
    return await service.update_phone(user.id, body.phone_number)
