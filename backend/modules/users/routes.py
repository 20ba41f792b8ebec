"""
User profile endpoints.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_tweet_service, get_user_service
from api.middleware.auth import get_current_user
from modules.tweets.interfaces import ITweetService
from modules.tweets.models import TweetView
from shared.models import AuthenticatedUser, MessageResponse

from .interfaces import IUserService
from .models import AccountView, PublicProfile, SearchResult, UpdateProfileRequest

router = APIRouter()


@router.get("/search", response_model=list[SearchResult])
async def search_users(
    q: str = Query("", description="Matched against username and name"),
    service: IUserService = Depends(get_user_service),
) -> list[SearchResult]:
    return await service.search(q)


@router.put("/profile", response_model=AccountView)
async def update_profile(
    body: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> AccountView:
    return await service.update_profile(user.id, body)


@router.get("/{username}", response_model=PublicProfile)
async def get_profile(
    username: str,
    service: IUserService = Depends(get_user_service),
) -> PublicProfile:
    return await service.get_profile(username)


@router.get("/{username}/tweets", response_model=list[TweetView])
async def get_user_tweets(
    username: str,
    tweets: ITweetService = Depends(get_tweet_service),
) -> list[TweetView]:
    return await tweets.list_by_author(username)


@router.post("/{user_id}/follow", response_model=MessageResponse)
async def follow(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    await service.follow(user.id, user_id)
    return MessageResponse(message="User followed successfully")


@router.delete("/{user_id}/follow", response_model=MessageResponse)
async def unfollow(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    await service.unfollow(user.id, user_id)
    return MessageResponse(message="User unfollowed successfully")
