"""
Tweets module.

Tweets with text, images or audio, plus likes, retweets, replies and the
home feed.

Public API:
- ITweetService: Interface for tweet operations
- Tweet, TweetView: Stored tweet and its API view
- Tweet exceptions
"""

from .exceptions import InvalidTweetError, NotTweetOwnerError, TweetActionError, TweetNotFoundError
from .interfaces import ITweetRepository, ITweetService
from .models import AudioAttachment, Tweet, TweetCreateRequest, TweetView

__all__ = [
    "ITweetRepository",
    "ITweetService",
    "AudioAttachment",
    "Tweet",
    "TweetCreateRequest",
    "TweetView",
    "InvalidTweetError",
    "NotTweetOwnerError",
    "TweetActionError",
    "TweetNotFoundError",
]
