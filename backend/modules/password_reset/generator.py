"""
Temporary password and reset token generation.
"""

import secrets
import string

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
LETTERS = UPPERCASE + LOWERCASE


def generate_temporary_password(length: int = 12) -> str:
    """Random letters with at least one uppercase and one lowercase letter."""
    if length < 2:
        raise ValueError("Temporary password needs at least 2 characters")
    chars = [secrets.choice(UPPERCASE), secrets.choice(LOWERCASE)]
    chars.extend(secrets.choice(LETTERS) for _ in range(length - 2))
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def generate_reset_token(length: int = 32) -> str:
    return "".join(secrets.choice(LETTERS) for _ in range(length))
