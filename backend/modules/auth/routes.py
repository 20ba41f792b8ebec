"""
Authentication API endpoints.

Registration, login with step-up verification, the current account, the
login-history ledger and logout.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_auth_service, get_geolocator
from api.middleware.auth import get_current_user
from modules.users.models import AccountView
from shared.models import AuthenticatedUser, MessageResponse

from .fingerprint import GeoLocator, fingerprint_request
from .interfaces import IAuthService
from .models import (
    AuthResponse,
    LoginHistoryResponse,
    LoginRequest,
    LoginResult,
    RegisterRequest,
    VerifyBrowserOTPRequest,
)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
    geolocator: GeoLocator = Depends(get_geolocator),
) -> AuthResponse:
    """Create an account. The response carries an access token."""
    return await service.register(body, fingerprint_request(request, geolocator))


@router.post("/login", response_model=LoginResult)
async def login(
    body: LoginRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
    geolocator: GeoLocator = Depends(get_geolocator),
) -> LoginResult:
    """
    Log in with email and password.

    Depending on browser and device the login is granted (token returned),
    parked until the emailed code is verified (``requires_otp: true``), or
    refused with 403 ``MOBILE_ACCESS_RESTRICTED``.
    """
    fingerprint = fingerprint_request(request, geolocator, body.client_browser)
    return await service.login(body, fingerprint)


@router.post("/verify-browser-otp", response_model=AuthResponse)
async def verify_browser_otp(
    body: VerifyBrowserOTPRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
    geolocator: GeoLocator = Depends(get_geolocator),
) -> AuthResponse:
    """Complete a parked login with the emailed code."""
    return await service.verify_browser_otp(body, fingerprint_request(request, geolocator))


@router.get("/me", response_model=AccountView)
async def me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> AccountView:
    return await service.get_me(user.id)


@router.get("/login-history", response_model=LoginHistoryResponse)
async def login_history(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> LoginHistoryResponse:
    """Login attempts, newest first, plus the open session if any."""
    return await service.get_login_history(user.id)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    await service.logout(user.id)
    return MessageResponse(message="Logged out successfully")
