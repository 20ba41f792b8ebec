"""
JWT Authentication middleware.

Validates bearer access tokens and extracts the user id.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import TokenConfigurationError
from modules.auth.models import TokenPayload
from modules.auth.tokens import decode_access_token
from shared.config import Settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_app_settings

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_token(token: str, settings: Settings) -> TokenPayload:
    """
    Decode and validate an access token.

    Args:
        token: The JWT token string
        settings: Settings holding the signing secret

    Returns:
        TokenPayload with decoded claims

    Raises:
        AuthError: If token is invalid or expired
    """
    try:
        return decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)
    except TokenConfigurationError as e:
        raise AuthError(e.message)
    except AuthenticationError as e:
        raise AuthError(e.message)


def get_user_from_payload(payload: TokenPayload) -> AuthenticatedUser:
    return AuthenticatedUser(id=payload.sub)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    payload = decode_token(credentials.credentials, settings)
    return get_user_from_payload(payload)

