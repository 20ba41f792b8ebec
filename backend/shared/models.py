"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Populated from the bearer token and made available to route handlers
    via dependency injection. The token only carries the user id; anything
    else is loaded from the users repository when needed.
    """

    id: str = Field(..., description="User ID")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by mutating endpoints."""

    message: str
    success: bool = True
