"""
User profile service.

Public profiles, profile edits, the follow graph and user search.
"""

import logging

from shared.schedule import Clock, utc_now

from .exceptions import EmptySearchQueryError, FollowError, UserNotFoundError
from .interfaces import IUserRepository, IUserService
from .models import (
    AccountView,
    PublicProfile,
    SearchResult,
    UpdateProfileRequest,
    UserSummary,
)

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 20


class UserService(IUserService):
    """Implementation of profile and social-graph operations."""

    def __init__(self, users: IUserRepository, clock: Clock = utc_now):
        self._users = users
        self._clock = clock

    async def get_profile(self, username: str) -> PublicProfile:
        user = self._users.get_by_username(username)
        if not user:
            raise UserNotFoundError(username)

        followers = self._users.get_many(user.followers)
        following = self._users.get_many(user.following)

        return PublicProfile(
            id=user.id,
            username=user.username,
            name=user.name,
            bio=user.bio,
            profile_picture=user.profile_picture,
            cover_picture=user.cover_picture,
            followers=[UserSummary.from_user(u) for u in followers],
            following=[UserSummary.from_user(u) for u in following],
            created_at=user.created_at,
        )

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
    ) -> AccountView:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = self._clock()

        self._users.save(user)
        logger.info(f"Profile updated for {user.username}: {sorted(changes)}")
        return AccountView.from_user(user)

    async def follow(self, user_id: str, target_id: str) -> None:
        target = self._users.get_by_id(target_id)
        if not target:
            raise UserNotFoundError(target_id)
        if target_id == user_id:
            raise FollowError("You cannot follow yourself")

        current = self._users.get_by_id(user_id)
        if not current:
            raise UserNotFoundError(user_id)
        if target_id in current.following:
            raise FollowError("Already following this user")

        current.following.append(target_id)
        if user_id not in target.followers:
            target.followers.append(user_id)

        self._users.save(current)
        self._users.save(target)

    async def unfollow(self, user_id: str, target_id: str) -> None:
        target = self._users.get_by_id(target_id)
        if not target:
            raise UserNotFoundError(target_id)

        current = self._users.get_by_id(user_id)
        if not current:
            raise UserNotFoundError(user_id)
        if target_id not in current.following:
            raise FollowError("Not following this user")

        current.following = [uid for uid in current.following if uid != target_id]
        target.followers = [uid for uid in target.followers if uid != user_id]

        self._users.save(current)
        self._users.save(target)

    async def search(self, query: str) -> list[SearchResult]:
        query = (query or "").strip()
        if not query:
            raise EmptySearchQueryError()
        return [SearchResult.from_user(u) for u in self._users.search(query, SEARCH_LIMIT)]
