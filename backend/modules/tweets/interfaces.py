"""
Tweet module interfaces.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import (
    CreatedTweetResponse,
    LikeResponse,
    Tweet,
    TweetCreateRequest,
    TweetDetail,
    TweetView,
)


@runtime_checkable
class ITweetRepository(Protocol):
    def create(self, tweet: Tweet) -> Tweet:
        ...

    def get_by_id(self, tweet_id: str) -> Optional[Tweet]:
        ...

    def get_many(self, tweet_ids: list[str]) -> list[Tweet]:
        ...

    def list_top_level(self, offset: int, limit: int) -> list[Tweet]:
        """Non-reply tweets, newest first."""
        ...

    def list_by_authors(self, author_ids: list[str], limit: int) -> list[Tweet]:
        """Non-reply tweets by any of the authors, newest first."""
        ...

    def list_replies(self, tweet_id: str) -> list[Tweet]:
        """Replies to a tweet, oldest first."""
        ...

    def find_retweet(self, author_id: str, original_id: str) -> Optional[Tweet]:
        ...

    def save(self, tweet: Tweet) -> Tweet:
        ...

    def delete(self, tweet_id: str) -> None:
        ...


@runtime_checkable
class ITweetService(Protocol):
    """
    Interface for tweets and their interactions.

    Posting a top-level tweet goes through the subscription quota gate.
    """

    async def create(self, user_id: str, request: TweetCreateRequest) -> CreatedTweetResponse:
        """
        Post a tweet.

        Raises:
            InvalidTweetError: If the tweet is empty or the audio is unacceptable
            SubscriptionExpiredError, TweetLimitReachedError: From the quota gate
        """
        ...

    async def list_tweets(self, page: int = 1, limit: int = 50) -> list[TweetView]:
        ...

    async def get(self, tweet_id: str) -> TweetDetail:
        ...

    async def delete(self, user_id: str, tweet_id: str) -> None:
        """
        Raises:
            TweetNotFoundError: If the tweet does not exist
            NotTweetOwnerError: If the user is not the author
        """
        ...

    async def like(self, user_id: str, tweet_id: str) -> LikeResponse:
        ...

    async def unlike(self, user_id: str, tweet_id: str) -> LikeResponse:
        ...

    async def retweet(self, user_id: str, tweet_id: str) -> TweetView:
        ...

    async def reply(self, user_id: str, tweet_id: str, request: TweetCreateRequest) -> TweetView:
        ...

    async def feed(self, user_id: str) -> list[TweetView]:
        """Own and followed users' non-reply tweets, newest first."""
        ...

    async def list_by_author(self, username: str) -> list[TweetView]:
        ...
