"""Tests for the tweet service."""

import pytest
from pydantic import ValidationError

from modules.subscriptions.exceptions import TweetLimitReachedError
from modules.subscriptions.models import PLANS, PlanType, Subscription, activate_plan
from modules.tweets.exceptions import (
    InvalidTweetError,
    NotTweetOwnerError,
    TweetActionError,
    TweetNotFoundError,
)
from modules.tweets.models import AudioAttachment, TweetCreateRequest
from modules.users.exceptions import UserNotFoundError


def grant_plan(container, user_id, plan=PlanType.GOLD):
    now = container.clock()
    subscription = activate_plan(Subscription.free(user_id, now), PLANS[plan], "order_x", "pay_x", now)
    container.subscription_repository.save(subscription)


def text(content="hello") -> TweetCreateRequest:
    return TweetCreateRequest(content=content)


@pytest.fixture
def service(container):
    return container.tweets


@pytest.fixture
def unlimited(container, alice, bob):
    grant_plan(container, alice.id)
    grant_plan(container, bob.id)


class TestValidation:
    @pytest.mark.asyncio
    async def test_empty_tweet(self, service, alice):
        with pytest.raises(InvalidTweetError, match="must have content"):
            await service.create(alice.id, TweetCreateRequest())

    @pytest.mark.asyncio
    async def test_images_only_is_fine(self, service, alice):
        created = await service.create(alice.id, TweetCreateRequest(images=["https://images.test/a.png"]))
        assert created.images == ["https://images.test/a.png"]

    @pytest.mark.asyncio
    async def test_audio_without_url(self, service, alice):
        with pytest.raises(InvalidTweetError, match="Invalid audio data"):
            await service.create(alice.id, TweetCreateRequest(audio=AudioAttachment(duration=10)))

    @pytest.mark.asyncio
    async def test_audio_too_long(self, service, alice):
        audio = AudioAttachment(url="https://audio.test/a.mp3", duration=301)
        with pytest.raises(InvalidTweetError, match="5 minutes"):
            await service.create(alice.id, TweetCreateRequest(audio=audio))

    @pytest.mark.asyncio
    async def test_audio_too_big(self, service, alice):
        audio = AudioAttachment(url="https://audio.test/a.mp3", size=100 * 1024 * 1024 + 1)
        with pytest.raises(InvalidTweetError, match="100 MB"):
            await service.create(alice.id, TweetCreateRequest(audio=audio))

    def test_content_length_limit(self):
        TweetCreateRequest(content="x" * 280)
        with pytest.raises(ValidationError):
            TweetCreateRequest(content="x" * 281)

    @pytest.mark.asyncio
    async def test_invalid_tweet_consumes_no_quota(self, service, alice):
        with pytest.raises(InvalidTweetError):
            await service.create(alice.id, TweetCreateRequest())
        await service.create(alice.id, text())


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_reports_quota(self, service, alice):
        created = await service.create(alice.id, text("first!"))

        assert created.content == "first!"
        assert created.author.username == "alice"
        assert created.subscription.tweets_used == 1
        assert created.subscription.tweets_limit == 1
        assert created.subscription.tweets_remaining == 0

    @pytest.mark.asyncio
    async def test_free_quota_enforced(self, service, alice):
        await service.create(alice.id, text())
        with pytest.raises(TweetLimitReachedError):
            await service.create(alice.id, text("again"))

    @pytest.mark.asyncio
    async def test_unlimited_remaining(self, service, unlimited, alice):
        created = await service.create(alice.id, text())
        assert created.subscription.tweets_remaining == -1


class TestReading:
    @pytest.mark.asyncio
    async def test_list_newest_first_and_paginated(self, service, clock, unlimited, alice):
        for n in range(3):
            await service.create(alice.id, text(f"tweet {n}"))
            clock.advance(minutes=1)

        page_one = await service.list_tweets(page=1, limit=2)
        page_two = await service.list_tweets(page=2, limit=2)
        assert [t.content for t in page_one] == ["tweet 2", "tweet 1"]
        assert [t.content for t in page_two] == ["tweet 0"]

    @pytest.mark.asyncio
    async def test_get_with_replies(self, service, clock, alice, bob):
        tweet = await service.create(alice.id, text("question"))
        await service.reply(bob.id, tweet.id, text("answer 1"))
        clock.advance(seconds=1)
        await service.reply(alice.id, tweet.id, text("answer 2"))

        detail = await service.get(tweet.id)
        assert [r.content for r in detail.replies] == ["answer 1", "answer 2"]
        assert detail.replies[0].author.username == "bob"

    @pytest.mark.asyncio
    async def test_replies_stay_out_of_timeline(self, service, alice, bob):
        tweet = await service.create(alice.id, text())
        await service.reply(bob.id, tweet.id, text("reply"))
        assert [t.id for t in await service.list_tweets()] == [tweet.id]

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(TweetNotFoundError):
            await service.get("missing")

    @pytest.mark.asyncio
    async def test_feed_includes_followed_authors(self, service, container, alice, bob):
        carol = container.user_repository.create(
            bob.model_copy(update={"id": "carol-id", "username": "carol", "email": "carol@example.com"})
        )
        await service.create(bob.id, text("from bob"))
        await service.create(carol.id, text("from carol"))
        await container.users.follow(alice.id, bob.id)

        feed = await service.feed(alice.id)
        assert [t.content for t in feed] == ["from bob"]

    @pytest.mark.asyncio
    async def test_list_by_author(self, service, alice, bob):
        await service.create(alice.id, text("mine"))
        await service.create(bob.id, text("theirs"))
        assert [t.content for t in await service.list_by_author("alice")] == ["mine"]

    @pytest.mark.asyncio
    async def test_list_by_unknown_author(self, service):
        with pytest.raises(UserNotFoundError):
            await service.list_by_author("nobody")

    @pytest.mark.asyncio
    async def test_deleted_author_placeholder(self, service, container):
        from modules.tweets.models import Tweet

        orphan = container.tweet_repository.create(Tweet(author_id="gone", content="orphan"))
        view = await service.get(orphan.id)
        assert view.author.username == "deleted"


class TestInteractions:
    @pytest.mark.asyncio
    async def test_like_and_unlike(self, service, alice, bob):
        tweet = await service.create(alice.id, text())

        liked = await service.like(bob.id, tweet.id)
        assert liked.likes_count == 1
        with pytest.raises(TweetActionError, match="already liked"):
            await service.like(bob.id, tweet.id)

        unliked = await service.unlike(bob.id, tweet.id)
        assert unliked.likes_count == 0
        with pytest.raises(TweetActionError, match="not liked yet"):
            await service.unlike(bob.id, tweet.id)

    @pytest.mark.asyncio
    async def test_retweet_copies_and_links_original(self, service, alice, bob):
        tweet = await service.create(alice.id, text("worth sharing"))

        retweet = await service.retweet(bob.id, tweet.id)

        assert retweet.is_retweet
        assert retweet.content == "worth sharing"
        assert retweet.author.username == "bob"
        assert retweet.original_tweet.id == tweet.id
        assert retweet.original_tweet.author.username == "alice"
        assert (await service.get(tweet.id)).retweets == [bob.id]

    @pytest.mark.asyncio
    async def test_retweet_once(self, service, alice, bob):
        tweet = await service.create(alice.id, text())
        await service.retweet(bob.id, tweet.id)
        with pytest.raises(TweetActionError, match="Already retweeted"):
            await service.retweet(bob.id, tweet.id)

    @pytest.mark.asyncio
    async def test_retweet_and_reply_skip_quota(self, service, alice, bob):
        tweet = await service.create(alice.id, text())
        await service.create(bob.id, text())

        await service.retweet(bob.id, tweet.id)
        reply = await service.reply(bob.id, tweet.id, text("nice"))
        assert reply.is_reply and reply.reply_to == tweet.id

    @pytest.mark.asyncio
    async def test_empty_reply(self, service, alice, bob):
        tweet = await service.create(alice.id, text())
        with pytest.raises(InvalidTweetError):
            await service.reply(bob.id, tweet.id, TweetCreateRequest())

    @pytest.mark.asyncio
    async def test_image_only_reply(self, service, alice, bob):
        tweet = await service.create(alice.id, text())
        reply = await service.reply(
            bob.id, tweet.id, TweetCreateRequest(images=["https://images.test/r.png"])
        )
        assert reply.content == ""
        assert reply.images == ["https://images.test/r.png"]

    @pytest.mark.asyncio
    async def test_reply_to_missing_tweet(self, service, bob):
        with pytest.raises(TweetNotFoundError):
            await service.reply(bob.id, "missing", text())

    @pytest.mark.asyncio
    async def test_only_author_deletes(self, service, alice, bob):
        tweet = await service.create(alice.id, text())
        with pytest.raises(NotTweetOwnerError):
            await service.delete(bob.id, tweet.id)

        await service.delete(alice.id, tweet.id)
        with pytest.raises(TweetNotFoundError):
            await service.get(tweet.id)
