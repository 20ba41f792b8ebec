"""
OTP repositories for the ``otps`` table.
"""

from datetime import datetime
from typing import Optional

from shared.repository import BaseRepository

from .codes import is_expired
from .interfaces import IOTPRepository
from .models import OTPRecord


class SupabaseOTPRepository(BaseRepository[OTPRecord], IOTPRepository):
    """Repository for standalone codes in Supabase."""

    table = "otps"
    model = OTPRecord

    def create(self, record: OTPRecord) -> OTPRecord:
        return self._insert(record)

    def get_by_id(self, otp_id: str) -> Optional[OTPRecord]:
        result = self._db.table(self.table).select("*").eq("id", otp_id).execute()
        return self._first(result.data)

    def get_pending(self, user_id: str) -> Optional[OTPRecord]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .eq("verified", False)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        return self._first(result.data)

    def get_verified(self, user_id: str, now: datetime) -> Optional[OTPRecord]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("user_id", user_id)
            .eq("verified", True)
            .gte("expires_at", self._iso(now))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        return self._first(result.data)

    def delete_unverified(self, user_id: str) -> None:
        self._db.table(self.table).delete().eq("user_id", user_id).eq("verified", False).execute()

    def save(self, record: OTPRecord) -> OTPRecord:
        return self._update(record)

    def delete(self, otp_id: str) -> None:
        self._db.table(self.table).delete().eq("id", otp_id).execute()


class InMemoryOTPRepository(IOTPRepository):
    def __init__(self) -> None:
        self._records: dict[str, OTPRecord] = {}

    def _newest(self, records: list[OTPRecord]) -> Optional[OTPRecord]:
        if not records:
            return None
        return max(records, key=lambda r: r.created_at).model_copy()

    def create(self, record: OTPRecord) -> OTPRecord:
        self._records[record.id] = record.model_copy()
        return record

    def get_by_id(self, otp_id: str) -> Optional[OTPRecord]:
        record = self._records.get(otp_id)
        return record.model_copy() if record else None

    def get_pending(self, user_id: str) -> Optional[OTPRecord]:
        return self._newest(
            [r for r in self._records.values() if r.user_id == user_id and not r.verified]
        )

    def get_verified(self, user_id: str, now: datetime) -> Optional[OTPRecord]:
        return self._newest(
            [
                r
                for r in self._records.values()
                if r.user_id == user_id and r.verified and not is_expired(r.expires_at, now)
            ]
        )

    def delete_unverified(self, user_id: str) -> None:
        self._records = {
            rid: r
            for rid, r in self._records.items()
            if not (r.user_id == user_id and not r.verified)
        }

    def save(self, record: OTPRecord) -> OTPRecord:
        self._records[record.id] = record.model_copy()
        return record

    def delete(self, otp_id: str) -> None:
        self._records.pop(otp_id, None)
