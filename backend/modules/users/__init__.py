"""
Users module.

The user document (profile, follow graph, login-history ledger, pending
codes, trusted devices) and the profile/social-graph service.

Public API:
- IUserRepository, IUserService: Interfaces
- User: The stored user document
- UserSummary, AccountView, PublicProfile: API views
- User exceptions
"""

from .exceptions import EmptySearchQueryError, FollowError, UserAlreadyExistsError, UserNotFoundError
from .interfaces import IUserRepository, IUserService
from .models import (
    AccountView,
    Language,
    LoginHistoryEntry,
    PublicProfile,
    User,
    UserSummary,
)

__all__ = [
    # Interfaces
    "IUserRepository",
    "IUserService",
    # Models
    "AccountView",
    "Language",
    "LoginHistoryEntry",
    "PublicProfile",
    "User",
    "UserSummary",
    # Exceptions
    "EmptySearchQueryError",
    "FollowError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
