"""
Tweet endpoints.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_tweet_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser, MessageResponse

from .interfaces import ITweetService
from .models import (
    DEFAULT_PAGE_SIZE,
    CreatedTweetResponse,
    LikeResponse,
    TweetCreateRequest,
    TweetDetail,
    TweetView,
)

router = APIRouter()


@router.post("", response_model=CreatedTweetResponse, status_code=201)
async def create_tweet(
    body: TweetCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITweetService = Depends(get_tweet_service),
) -> CreatedTweetResponse:
    """
    Post a tweet.

    Counts against the subscription quota; the response reports usage.
    Returns 403 ``LIMIT_REACHED`` or ``SUBSCRIPTION_EXPIRED`` when refused.
    """
    return await service.create(user.id, body)


@router.get("", response_model=list[TweetView])
async def list_tweets(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    service: ITweetService = Depends(get_tweet_service),
) -> list[TweetView]:
    return await service.list_tweets(page, limit)


@router.get("/feed", response_model=list[TweetView])
async def feed(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITweetService = Depends(get_tweet_service),
) -> list[TweetView]:
    return await service.feed(user.id)


@router.get("/{tweet_id}", response_model=TweetDetail)
async def get_tweet(
    tweet_id: str,
    service: ITweetService = Depends(get_tweet_service),
) -> TweetDetail:
    return await service.get(tweet_id)


@router.delete("/{tweet_id}", response_model=MessageResponse)
async def delete_tweet(
    tweet_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITweetService = Depends(get_tweet_service),
) -> MessageResponse:
    await service.delete(user.id, tweet_id)
    return MessageResponse(message="Tweet deleted successfully")


@router.post("/{tweet_id}/like", response_model=LikeResponse)
async def like_tweet(
    tweet_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITweetService = Depends(get_tweet_service),
) -> LikeResponse:
    return await service.like(user.id, tweet_id)


@router.delete("/{tweet_id}/like", response_model=LikeResponse)
async def unlike_tweet(
    tweet_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITweetService = Depends(get_tweet_service),
) -> LikeResponse:
    return await service.unlike(user.id, tweet_id)


@router.post("/{tweet_id}/retweet", response_model=TweetView, status_code=201)
async def retweet(
    tweet_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITweetService = Depends(get_tweet_service),
) -> TweetView:
    return await service.retweet(user.id, tweet_id)


@router.post("/{tweet_id}/reply", response_model=TweetView, status_code=201)
async def reply(
    tweet_id: str,
    body: TweetCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITweetService = Depends(get_tweet_service),
) -> TweetView:
    return await service.reply(user.id, tweet_id, body)
