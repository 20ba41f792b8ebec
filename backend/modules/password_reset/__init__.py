"""
Password reset module.

Forgot-password flow: once per local day a user can have a temporary
password and a single-use reset link emailed to them.

Public API:
- IPasswordResetService: Interface for the reset flow
- PasswordReset: The stored request
- generate_temporary_password, generate_reset_token
- ResetAlreadyRequestedError, InvalidResetTokenError
"""

from .exceptions import InvalidResetTokenError, ResetAlreadyRequestedError
from .generator import generate_reset_token, generate_temporary_password
from .interfaces import IPasswordResetRepository, IPasswordResetService
from .models import PasswordReset

__all__ = [
    "IPasswordResetRepository",
    "IPasswordResetService",
    "PasswordReset",
    "generate_reset_token",
    "generate_temporary_password",
    "InvalidResetTokenError",
    "ResetAlreadyRequestedError",
]
