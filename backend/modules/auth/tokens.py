"""
Access tokens.

HS256 JWTs carrying only the user id (``sub``). Issued on register, on a
granted login and on a verified step-up code; validated by the API
middleware. Expiry is always checked against the real clock.
"""

from datetime import timedelta
from typing import Optional

import jwt

from shared.schedule import utc_now

from .exceptions import ExpiredTokenError, InvalidTokenError, TokenConfigurationError
from .models import TokenPayload


def create_access_token(
    user_id: str,
    secret: str,
    expires_in: timedelta = timedelta(days=7),
    algorithm: str = "HS256",
) -> str:
    if not secret:
        raise TokenConfigurationError()
    now = utc_now()
    payload = {
        "sub": user_id,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret: str,
    algorithm: str = "HS256",
    leeway: Optional[timedelta] = None,
) -> TokenPayload:
    """
    Decode and validate an access token.

    Raises:
        TokenConfigurationError: If no signing secret is configured
        ExpiredTokenError: If the token has expired
        InvalidTokenError: If the token is malformed or badly signed
    """
    if not secret:
        raise TokenConfigurationError()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            leeway=leeway or timedelta(0),
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Invalid token: {e}")
    return TokenPayload(**payload)
