"""
Authentication module.

Registration, login with step-up verification, access tokens and the
login-history ledger.

Public API:
- IAuthService: Interface for auth operations
- classify_browser, evaluate_access: Login policy
- build_fingerprint, GeoLocator: Request fingerprinting
- create_access_token, decode_access_token: JWT helpers
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .classifier import BrowserClass, classify_browser
from .exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    MobileAccessRestrictedError,
    TokenConfigurationError,
)
from .fingerprint import GeoLocator, RequestFingerprint, build_fingerprint
from .interfaces import IAuthService
from .models import TokenPayload
from .policy import AccessDecision, AccessOutcome, evaluate_access
from .tokens import create_access_token, decode_access_token

__all__ = [
    # Interface
    "IAuthService",
    # Policy
    "AccessDecision",
    "AccessOutcome",
    "BrowserClass",
    "classify_browser",
    "evaluate_access",
    # Fingerprinting
    "GeoLocator",
    "RequestFingerprint",
    "build_fingerprint",
    # Tokens
    "TokenPayload",
    "create_access_token",
    "decode_access_token",
    # Exceptions
    "ExpiredTokenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "MobileAccessRestrictedError",
    "TokenConfigurationError",
]
