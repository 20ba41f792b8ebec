"""
Tweet repositories for the ``tweets`` table.
"""

from typing import Optional

from shared.repository import BaseRepository

from .interfaces import ITweetRepository
from .models import Tweet


class SupabaseTweetRepository(BaseRepository[Tweet], ITweetRepository):
    """Tweets in Supabase; likes and retweets are text[] columns."""

    table = "tweets"
    model = Tweet

    def create(self, tweet: Tweet) -> Tweet:
        return self._insert(tweet)

    def get_by_id(self, tweet_id: str) -> Optional[Tweet]:
        result = self._db.table(self.table).select("*").eq("id", tweet_id).execute()
        return self._first(result.data)

    def get_many(self, tweet_ids: list[str]) -> list[Tweet]:
        if not tweet_ids:
            return []
        result = self._db.table(self.table).select("*").in_("id", tweet_ids).execute()
        return [self._to_model(row) for row in result.data]

    def list_top_level(self, offset: int, limit: int) -> list[Tweet]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("is_reply", False)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [self._to_model(row) for row in result.data]

    def list_by_authors(self, author_ids: list[str], limit: int) -> list[Tweet]:
        if not author_ids:
            return []
        result = (
            self._db.table(self.table)
            .select("*")
            .in_("author_id", author_ids)
            .eq("is_reply", False)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [self._to_model(row) for row in result.data]

    def list_replies(self, tweet_id: str) -> list[Tweet]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("reply_to", tweet_id)
            .order("created_at")
            .execute()
        )
        return [self._to_model(row) for row in result.data]

    def find_retweet(self, author_id: str, original_id: str) -> Optional[Tweet]:
        result = (
            self._db.table(self.table)
            .select("*")
            .eq("author_id", author_id)
            .eq("original_tweet_id", original_id)
            .eq("is_retweet", True)
            .limit(1)
            .execute()
        )
        return self._first(result.data)

    def save(self, tweet: Tweet) -> Tweet:
        return self._update(tweet)

    def delete(self, tweet_id: str) -> None:
        self._db.table(self.table).delete().eq("id", tweet_id).execute()


class InMemoryTweetRepository(ITweetRepository):
    def __init__(self) -> None:
        self._tweets: dict[str, Tweet] = {}

    def _newest_first(self, tweets: list[Tweet]) -> list[Tweet]:
        return [t.model_copy(deep=True) for t in sorted(tweets, key=lambda t: t.created_at, reverse=True)]

    def create(self, tweet: Tweet) -> Tweet:
        self._tweets[tweet.id] = tweet.model_copy(deep=True)
        return tweet

    def get_by_id(self, tweet_id: str) -> Optional[Tweet]:
        tweet = self._tweets.get(tweet_id)
        return tweet.model_copy(deep=True) if tweet else None

    def get_many(self, tweet_ids: list[str]) -> list[Tweet]:
        return [self._tweets[i].model_copy(deep=True) for i in tweet_ids if i in self._tweets]

    def list_top_level(self, offset: int, limit: int) -> list[Tweet]:
        tweets = self._newest_first([t for t in self._tweets.values() if not t.is_reply])
        return tweets[offset : offset + limit]

    def list_by_authors(self, author_ids: list[str], limit: int) -> list[Tweet]:
        authors = set(author_ids)
        tweets = self._newest_first(
            [t for t in self._tweets.values() if t.author_id in authors and not t.is_reply]
        )
        return tweets[:limit]

    def list_replies(self, tweet_id: str) -> list[Tweet]:
        replies = [t for t in self._tweets.values() if t.reply_to == tweet_id]
        return [t.model_copy(deep=True) for t in sorted(replies, key=lambda t: t.created_at)]

    def find_retweet(self, author_id: str, original_id: str) -> Optional[Tweet]:
        for tweet in self._tweets.values():
            if (
                tweet.is_retweet
                and tweet.author_id == author_id
                and tweet.original_tweet_id == original_id
            ):
                return tweet.model_copy(deep=True)
        return None

    def save(self, tweet: Tweet) -> Tweet:
        self._tweets[tweet.id] = tweet.model_copy(deep=True)
        return tweet

    def delete(self, tweet_id: str) -> None:
        self._tweets.pop(tweet_id, None)
