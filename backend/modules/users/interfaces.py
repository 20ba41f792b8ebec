"""
Users module interfaces.

IUserRepository is the persistence contract shared by the auth, language,
password-reset, OTP, subscription and tweet services. IUserService is the
profile/social-graph contract exposed to the API layer.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import (
    AccountView,
    PublicProfile,
    SearchResult,
    UpdateProfileRequest,
    User,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Storage for User documents, including their embedded security state."""

    def create(self, user: User) -> User:
        ...

    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def get_many(self, user_ids: list[str]) -> list[User]:
        """Fetch several users; unknown ids are skipped."""
        ...

    def search(self, query: str, limit: int = 20) -> list[User]:
        """Case-insensitive substring match on username or name."""
        ...

    def save(self, user: User) -> User:
        """Persist the whole document, overwriting the stored one."""
        ...


@runtime_checkable
class IUserService(Protocol):
    """Profile and social-graph operations."""

    async def get_profile(self, username: str) -> PublicProfile:
        """
        Get a public profile by username.

        Raises:
            UserNotFoundError: If the username is unknown
        """
        ...

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
    ) -> AccountView:
        ...

    async def follow(self, user_id: str, target_id: str) -> None:
        """
        Follow another user.

        Raises:
            UserNotFoundError: If either user is unknown
            FollowError: On self-follow or when already following
        """
        ...

    async def unfollow(self, user_id: str, target_id: str) -> None:
        ...

    async def search(self, query: str) -> list[SearchResult]:
        ...
