"""
Base repository class for database access.

Provides a common abstraction layer for all Supabase-backed repositories,
encapsulating client access and the row <-> model mapping helpers.
"""

from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel
from supabase import Client


T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Subclasses set ``table`` and ``model`` and implement domain-specific
    queries. Rows are stored as the JSON dump of the model, so nested
    sub-documents (login history, pending codes) live in jsonb columns.

    Example:
        class TweetRepository(BaseRepository[Tweet]):
            table = "tweets"
            model = Tweet

            def get_by_id(self, tweet_id: str) -> Optional[Tweet]:
                result = self._db.table(self.table).select("*").eq("id", tweet_id).execute()
                return self._first(result.data)
    """

    table: str = ""
    model: type[T]

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _to_row(self, item: T) -> dict[str, Any]:
        """Serialize a model into a row payload."""
        return item.model_dump(mode="json")

    def _to_model(self, row: dict[str, Any]) -> T:
        """Map a database row to the repository's model."""
        return self.model.model_validate(row)

    def _first(self, rows: list[dict[str, Any]]) -> Optional[T]:
        if not rows:
            return None
        return self._to_model(rows[0])

    def _insert(self, item: T) -> T:
        result = self._db.table(self.table).insert(self._to_row(item)).execute()
        return self._to_model(result.data[0])

    def _update(self, item: T, key: str = "id") -> T:
        row = self._to_row(item)
        self._db.table(self.table).update(row).eq(key, row[key]).execute()
        return item

    @staticmethod
    def _iso(value: datetime) -> str:
        return value.isoformat()
