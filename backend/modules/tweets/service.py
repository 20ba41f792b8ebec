"""
Tweet service.

Posting, reading, liking, retweeting and replying. Top-level tweets are
counted against the author's subscription quota.
"""

import logging
from typing import Optional

from modules.subscriptions.interfaces import ISubscriptionService
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import UserSummary
from shared.schedule import Clock, utc_now

from .exceptions import InvalidTweetError, NotTweetOwnerError, TweetActionError, TweetNotFoundError
from .interfaces import ITweetRepository, ITweetService
from .models import (
    FEED_LIMIT,
    MAX_AUDIO_BYTES,
    MAX_AUDIO_SECONDS,
    CreatedTweetResponse,
    LikeResponse,
    QuotaInfo,
    Tweet,
    TweetCreateRequest,
    TweetDetail,
    TweetView,
)

logger = logging.getLogger(__name__)

DELETED_AUTHOR = "deleted"


def validate_tweet_body(request: TweetCreateRequest) -> None:
    """
    Check that a tweet has something to show and acceptable audio.

    Raises:
        InvalidTweetError: With the reason as message
    """
    if not request.content and not request.images and request.audio is None:
        raise InvalidTweetError("Tweet must have content, images, or audio")

    audio = request.audio
    if audio is None:
        return
    if not audio.url:
        raise InvalidTweetError("Invalid audio data")
    if audio.duration is not None and audio.duration > MAX_AUDIO_SECONDS:
        raise InvalidTweetError("Audio duration exceeds 5 minutes limit")
    if audio.size is not None and audio.size > MAX_AUDIO_BYTES:
        raise InvalidTweetError("Audio file size exceeds 100 MB limit")


class TweetService(ITweetService):
    """Implementation of tweet operations over a tweet repository."""

    def __init__(
        self,
        tweets: ITweetRepository,
        users: IUserRepository,
        subscriptions: ISubscriptionService,
        clock: Clock = utc_now,
    ):
        self._tweets = tweets
        self._users = users
        self._subscriptions = subscriptions
        self._clock = clock

    # -------------------------------------------------------------------------
    # View assembly
    # -------------------------------------------------------------------------

    def _authors(self, tweets: list[Tweet]) -> dict[str, UserSummary]:
        ids = list({t.author_id for t in tweets})
        return {u.id: UserSummary.from_user(u) for u in self._users.get_many(ids)}

    def _views(self, tweets: list[Tweet]) -> list[TweetView]:
        originals = {
            t.id: t
            for t in self._tweets.get_many(
                list({t.original_tweet_id for t in tweets if t.original_tweet_id})
            )
        }
        authors = self._authors(tweets + list(originals.values()))

        def build(tweet: Tweet, original: Optional[TweetView] = None) -> TweetView:
            author = authors.get(tweet.author_id) or UserSummary(
                id=tweet.author_id, username=DELETED_AUTHOR, name=DELETED_AUTHOR
            )
            return TweetView(
                id=tweet.id,
                author=author,
                content=tweet.content,
                images=tweet.images,
                audio=tweet.audio,
                likes=tweet.likes,
                retweets=tweet.retweets,
                is_reply=tweet.is_reply,
                reply_to=tweet.reply_to,
                is_retweet=tweet.is_retweet,
                original_tweet=original,
                created_at=tweet.created_at,
            )

        views = []
        for tweet in tweets:
            original = originals.get(tweet.original_tweet_id) if tweet.original_tweet_id else None
            views.append(build(tweet, build(original) if original else None))
        return views

    def _view(self, tweet: Tweet) -> TweetView:
        return self._views([tweet])[0]

    def _require(self, tweet_id: str) -> Tweet:
        tweet = self._tweets.get_by_id(tweet_id)
        if not tweet:
            raise TweetNotFoundError(tweet_id)
        return tweet

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def create(self, user_id: str, request: TweetCreateRequest) -> CreatedTweetResponse:
        validate_tweet_body(request)
        await self._subscriptions.ensure_can_post(user_id)

        now = self._clock()
        tweet = Tweet(
            author_id=user_id,
            content=request.content or "",
            images=request.images,
            audio=request.audio,
            created_at=now,
            updated_at=now,
        )
        self._tweets.create(tweet)
        subscription = await self._subscriptions.record_tweet(user_id)
        logger.info(
            f"Tweet {tweet.id} posted by {user_id} "
            f"({subscription.tweets_used}/{subscription.tweets_limit})"
        )

        view = self._view(tweet)
        return CreatedTweetResponse(
            **view.model_dump(),
            subscription=QuotaInfo(
                tweets_used=subscription.tweets_used,
                tweets_limit=subscription.tweets_limit,
                tweets_remaining=subscription.remaining,
            ),
        )

    async def list_tweets(self, page: int = 1, limit: int = 50) -> list[TweetView]:
        page = max(page, 1)
        return self._views(self._tweets.list_top_level((page - 1) * limit, limit))

    async def get(self, tweet_id: str) -> TweetDetail:
        tweet = self._require(tweet_id)
        view = self._view(tweet)
        replies = self._views(self._tweets.list_replies(tweet_id))
        return TweetDetail(**view.model_dump(), replies=[r.model_dump() for r in replies])

    async def delete(self, user_id: str, tweet_id: str) -> None:
        tweet = self._require(tweet_id)
        if tweet.author_id != user_id:
            raise NotTweetOwnerError()
        self._tweets.delete(tweet_id)
        logger.info(f"Tweet {tweet_id} deleted by {user_id}")

    async def like(self, user_id: str, tweet_id: str) -> LikeResponse:
        tweet = self._require(tweet_id)
        if user_id in tweet.likes:
            raise TweetActionError("Tweet already liked")
        tweet.likes.append(user_id)
        self._tweets.save(tweet)
        return LikeResponse(message="Tweet liked successfully", likes_count=len(tweet.likes))

    async def unlike(self, user_id: str, tweet_id: str) -> LikeResponse:
        tweet = self._require(tweet_id)
        if user_id not in tweet.likes:
            raise TweetActionError("Tweet not liked yet")
        tweet.likes = [uid for uid in tweet.likes if uid != user_id]
        self._tweets.save(tweet)
        return LikeResponse(message="Tweet unliked successfully", likes_count=len(tweet.likes))

    async def retweet(self, user_id: str, tweet_id: str) -> TweetView:
        original = self._require(tweet_id)
        if self._tweets.find_retweet(user_id, tweet_id):
            raise TweetActionError("Already retweeted")

        now = self._clock()
        retweet = Tweet(
            author_id=user_id,
            content=original.content,
            images=list(original.images),
            audio=original.audio,
            is_retweet=True,
            original_tweet_id=original.id,
            created_at=now,
            updated_at=now,
        )
        self._tweets.create(retweet)

        if user_id not in original.retweets:
            original.retweets.append(user_id)
            self._tweets.save(original)
        return self._view(retweet)

    async def reply(self, user_id: str, tweet_id: str, request: TweetCreateRequest) -> TweetView:
        parent = self._require(tweet_id)
        validate_tweet_body(request)

        now = self._clock()
        reply = Tweet(
            author_id=user_id,
            content=request.content or "",
            images=request.images,
            audio=request.audio,
            is_reply=True,
            reply_to=parent.id,
            created_at=now,
            updated_at=now,
        )
        self._tweets.create(reply)
        return self._view(reply)

    async def feed(self, user_id: str) -> list[TweetView]:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        authors = [user_id, *user.following]
        return self._views(self._tweets.list_by_authors(authors, FEED_LIMIT))

    async def list_by_author(self, username: str) -> list[TweetView]:
        user = self._users.get_by_username(username)
        if not user:
            raise UserNotFoundError(username)
        return self._views(self._tweets.list_by_authors([user.id], FEED_LIMIT))
