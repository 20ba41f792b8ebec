"""
User repositories.

SupabaseUserRepository stores one row per user in the ``users`` table, with
the embedded security state (login history, session, pending codes, trusted
devices, settings) in jsonb columns. InMemoryUserRepository keeps the same
documents in a dict for tests and local development.
"""

import re
from typing import Optional

from shared.repository import BaseRepository

from .interfaces import IUserRepository
from .models import User

# Characters with meaning inside a PostgREST or=() filter
_FILTER_UNSAFE = re.compile(r"[,()%*\\]")


class SupabaseUserRepository(BaseRepository[User], IUserRepository):
    """
    Repository for user documents in Supabase.

    Note: This repository does NOT enforce uniqueness beyond the table's
    unique indexes on ``username`` and ``email``. The auth service checks
    for duplicates before inserting.
    """

    table = "users"
    model = User

    def create(self, user: User) -> User:
        return self._insert(user)

    def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._db.table(self.table).select("*").eq("id", user_id).execute()
        return self._first(result.data)

    def get_by_email(self, email: str) -> Optional[User]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("email", email.strip().lower())
            .execute()
        )
        return self._first(result.data)

    def get_by_username(self, username: str) -> Optional[User]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("username", username.strip().lower())
            .execute()
        )
        return self._first(result.data)

    def get_many(self, user_ids: list[str]) -> list[User]:
        if not user_ids:
            return []
        result = self._db.table(self.table).select("*").in_("id", user_ids).execute()
        return [self._to_model(row) for row in result.data]

    def search(self, query: str, limit: int = 20) -> list[User]:
        term = _FILTER_UNSAFE.sub("", query)
        result = (
            self._db.table(self.table)
            .select("*")
            .or_(f"username.ilike.%{term}%,name.ilike.%{term}%")
            .limit(limit)
            .execute()
        )
        return [self._to_model(row) for row in result.data]

    def save(self, user: User) -> User:
        return self._update(user)


class InMemoryUserRepository(IUserRepository):
    """Dict-backed user storage. Stored documents are copies."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def create(self, user: User) -> User:
        self._users[user.id] = user.model_copy(deep=True)
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    def get_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        for user in self._users.values():
            if user.email == email:
                return user.model_copy(deep=True)
        return None

    def get_by_username(self, username: str) -> Optional[User]:
        username = username.strip().lower()
        for user in self._users.values():
            if user.username == username:
                return user.model_copy(deep=True)
        return None

    def get_many(self, user_ids: list[str]) -> list[User]:
        return [
            self._users[uid].model_copy(deep=True)
            for uid in user_ids
            if uid in self._users
        ]

    def search(self, query: str, limit: int = 20) -> list[User]:
        needle = query.lower()
        matches = [
            user.model_copy(deep=True)
            for user in self._users.values()
            if needle in user.username.lower() or needle in user.name.lower()
        ]
        return matches[:limit]

    def save(self, user: User) -> User:
        self._users[user.id] = user.model_copy(deep=True)
        return user
