"""
Password reset repositories for the ``password_resets`` table.
"""

from datetime import datetime
from typing import Optional

from shared.repository import BaseRepository

from .interfaces import IPasswordResetRepository
from .models import PasswordReset


class SupabasePasswordResetRepository(BaseRepository[PasswordReset], IPasswordResetRepository):
    table = "password_resets"
    model = PasswordReset

    def create(self, reset: PasswordReset) -> PasswordReset:
        return self._insert(reset)

    def get_by_token(self, token: str) -> Optional[PasswordReset]:
        result = self._db.table(self.table).select("*").eq("reset_token", token).execute()
        return self._first(result.data)

    def get_latest_since(self, user_id: str, since: datetime) -> Optional[PasswordReset]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .gte("created_at", self._iso(since))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        return self._first(result.data)

    def invalidate_unused(self, user_id: str) -> None:
        (
            self._db.table(self.table)
            .update({"is_used": True})
            .eq("user_id", user_id)
            .eq("is_used", False)
            .execute()
        )

    def save(self, reset: PasswordReset) -> PasswordReset:
        return self._update(reset)


class InMemoryPasswordResetRepository(IPasswordResetRepository):
    def __init__(self) -> None:
        self._resets: dict[str, PasswordReset] = {}

    def create(self, reset: PasswordReset) -> PasswordReset:
        self._resets[reset.id] = reset.model_copy()
        return reset

    def get_by_token(self, token: str) -> Optional[PasswordReset]:
        for reset in self._resets.values():
            if reset.reset_token == token:
                return reset.model_copy()
        return None

    def get_latest_since(self, user_id: str, since: datetime) -> Optional[PasswordReset]:
        matches = [
            r for r in self._resets.values() if r.user_id == user_id and r.created_at >= since
        ]
        if not matches:
            return None
        return max(matches, key=lambda r: r.created_at).model_copy()

    def invalidate_unused(self, user_id: str) -> None:
        for reset in self._resets.values():
            if reset.user_id == user_id:
                reset.is_used = True

    def save(self, reset: PasswordReset) -> PasswordReset:
        self._resets[reset.id] = reset.model_copy()
        return reset
