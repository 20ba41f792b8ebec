"""
Shared infrastructure for Chirp backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- schedule: Daily time windows in the policy timezone

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    ChirpError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    PolicyDeniedError,
    RateLimitedError,
    ExternalServiceError,
)
from .models import AuthenticatedUser, MessageResponse
from .schedule import Clock, ScheduledWindow, day_bounds, utc_now

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "ChirpError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "PolicyDeniedError",
    "RateLimitedError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "MessageResponse",
    "Clock",
    "ScheduledWindow",
    "day_bounds",
    "utc_now",
]
