"""
Tweet data models.
"""

from datetime import datetime
from typing import Optional
import uuid

from pydantic import BaseModel, Field

from modules.users.models import UserSummary
from shared.schedule import utc_now

MAX_TWEET_LENGTH = 280
MAX_AUDIO_SECONDS = 300
MAX_AUDIO_BYTES = 100 * 1024 * 1024
FEED_LIMIT = 50
DEFAULT_PAGE_SIZE = 50


class AudioAttachment(BaseModel):
    """Audio already uploaded to the media host."""

    url: str = ""
    duration: Optional[float] = Field(None, description="Length in seconds")
    size: Optional[int] = Field(None, description="Size in bytes")


class Tweet(BaseModel):
    """
    A stored tweet.

    Replies carry ``reply_to``; retweets carry ``original_tweet_id`` and a
    copy of the original's content and media.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    author_id: str
    content: str = ""
    images: list[str] = Field(default_factory=list)
    audio: Optional[AudioAttachment] = None
    likes: list[str] = Field(default_factory=list)
    retweets: list[str] = Field(default_factory=list)
    is_reply: bool = False
    reply_to: Optional[str] = None
    is_retweet: bool = False
    original_tweet_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class TweetCreateRequest(BaseModel):
    content: Optional[str] = Field(None, max_length=MAX_TWEET_LENGTH)
    images: list[str] = Field(default_factory=list)
    audio: Optional[AudioAttachment] = None


class TweetView(BaseModel):
    """A tweet with its author, and original tweet for retweets."""

    id: str
    author: UserSummary
    content: str
    images: list[str]
    audio: Optional[AudioAttachment] = None
    likes: list[str]
    retweets: list[str]
    is_reply: bool
    reply_to: Optional[str] = None
    is_retweet: bool
    original_tweet: Optional["TweetView"] = None
    created_at: datetime


class TweetDetail(TweetView):
    replies: list[TweetView] = Field(default_factory=list)


class QuotaInfo(BaseModel):
    tweets_used: int
    tweets_limit: int
    tweets_remaining: int = Field(..., description="-1 when the plan is unlimited")


class CreatedTweetResponse(TweetView):
    subscription: QuotaInfo


class LikeResponse(BaseModel):
    message: str
    likes_count: int
