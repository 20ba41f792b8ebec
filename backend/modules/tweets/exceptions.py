"""
Tweet module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class TweetNotFoundError(NotFoundError):
    def __init__(self, tweet_id: str):
        super().__init__(
            "Tweet not found",
            code="TWEET_NOT_FOUND",
            details={"tweet_id": tweet_id},
        )


class InvalidTweetError(ValidationError):
    """Raised for an empty tweet or unacceptable audio attachment."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_TWEET")


class TweetActionError(ValidationError):
    """Raised for duplicate likes, unlikes of unliked tweets and repeat retweets."""

    def __init__(self, message: str):
        super().__init__(message, code="TWEET_ACTION_INVALID")


class NotTweetOwnerError(AuthorizationError):
    def __init__(self):
        super().__init__("Not authorized to delete this tweet", code="NOT_TWEET_OWNER")
