"""
User module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user id or username does not resolve."""

    def __init__(self, identifier: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user": identifier},
        )


class UserAlreadyExistsError(ValidationError):
    """Raised when registering with an email or username already taken."""

    def __init__(self):
        super().__init__("User already exists", code="USER_EXISTS")


class FollowError(ValidationError):
    """Raised for self-follow, duplicate follow, or unfollowing a stranger."""

    def __init__(self, message: str):
        super().__init__(message, code="FOLLOW_ERROR")


class EmptySearchQueryError(ValidationError):
    def __init__(self):
        super().__init__("Search query is required", code="EMPTY_QUERY")
