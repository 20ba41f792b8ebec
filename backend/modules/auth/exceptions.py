"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ChirpError, PolicyDeniedError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class TokenConfigurationError(ChirpError):
    """Raised when tokens cannot be issued or checked because JWT_SECRET is unset."""

    def __init__(self):
        super().__init__("Server authentication not configured", code="AUTH_NOT_CONFIGURED")


class InvalidCredentialsError(AuthenticationError):
    """Raised on an unknown email or a wrong password. The two are not distinguished."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class MobileAccessRestrictedError(PolicyDeniedError):
    """Raised when a mobile login falls outside the user's allowed hours."""

    def __init__(self, message: str, start_hour: int, end_hour: int):
        super().__init__(
            message,
            code="MOBILE_ACCESS_RESTRICTED",
            details={"allowed_hours": {"start": start_hour, "end": end_hour}},
        )
