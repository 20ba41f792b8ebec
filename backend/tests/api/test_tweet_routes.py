"""Tests for tweet and user endpoints."""

from tests.conftest import create_test_token


def bearer(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(user.id)}"}


class TestTweetRoutes:
    def test_create_requires_auth(self, client):
        assert client.post("/api/tweets", json={"content": "hi"}).status_code == 401

    def test_create_and_fetch(self, client, auth_headers):
        response = client.post("/api/tweets", json={"content": "hello world"}, headers=auth_headers)
        assert response.status_code == 201
        created = response.json()
        assert created["subscription"] == {"tweets_used": 1, "tweets_limit": 1, "tweets_remaining": 0}

        detail = client.get(f"/api/tweets/{created['id']}").json()
        assert detail["content"] == "hello world"
        assert detail["author"]["username"] == "alice"
        assert detail["replies"] == []

    def test_quota_exhausted(self, client, auth_headers):
        client.post("/api/tweets", json={"content": "one"}, headers=auth_headers)
        response = client.post("/api/tweets", json={"content": "two"}, headers=auth_headers)

        assert response.status_code == 403
        data = response.json()
        assert data["error"] == "LIMIT_REACHED"
        assert data["details"]["limit"] == 1

    def test_too_long(self, client, auth_headers):
        response = client.post("/api/tweets", json={"content": "x" * 281}, headers=auth_headers)
        assert response.status_code == 400

    def test_empty_tweet(self, client, auth_headers):
        response = client.post("/api/tweets", json={}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_TWEET"

    def test_list_and_pagination_bounds(self, client, auth_headers):
        client.post("/api/tweets", json={"content": "hello"}, headers=auth_headers)
        assert len(client.get("/api/tweets").json()) == 1
        assert client.get("/api/tweets?page=0").status_code == 400
        assert client.get("/api/tweets?limit=101").status_code == 400

    def test_missing_tweet(self, client):
        response = client.get("/api/tweets/does-not-exist")
        assert response.status_code == 404
        assert response.json()["error"] == "TWEET_NOT_FOUND"

    def test_interactions(self, client, alice, bob):
        tweet = client.post("/api/tweets", json={"content": "hi"}, headers=bearer(alice)).json()

        liked = client.post(f"/api/tweets/{tweet['id']}/like", headers=bearer(bob))
        assert liked.json()["likes_count"] == 1
        assert client.post(f"/api/tweets/{tweet['id']}/like", headers=bearer(bob)).status_code == 400
        assert client.delete(f"/api/tweets/{tweet['id']}/like", headers=bearer(bob)).json()["likes_count"] == 0

        retweet = client.post(f"/api/tweets/{tweet['id']}/retweet", headers=bearer(bob))
        assert retweet.status_code == 201
        assert retweet.json()["original_tweet"]["id"] == tweet["id"]

        reply = client.post(
            f"/api/tweets/{tweet['id']}/reply", json={"content": "welcome"}, headers=bearer(bob)
        )
        assert reply.status_code == 201
        assert client.get(f"/api/tweets/{tweet['id']}").json()["replies"][0]["content"] == "welcome"

    def test_delete_only_by_author(self, client, alice, bob):
        tweet = client.post("/api/tweets", json={"content": "mine"}, headers=bearer(alice)).json()

        assert client.delete(f"/api/tweets/{tweet['id']}", headers=bearer(bob)).status_code == 403
        response = client.delete(f"/api/tweets/{tweet['id']}", headers=bearer(alice))
        assert response.json()["message"] == "Tweet deleted successfully"

    def test_feed(self, client, alice, bob):
        client.post("/api/tweets", json={"content": "bob here"}, headers=bearer(bob))
        client.post(f"/api/users/{bob.id}/follow", headers=bearer(alice))

        feed = client.get("/api/tweets/feed", headers=bearer(alice)).json()
        assert [t["content"] for t in feed] == ["bob here"]


class TestUserRoutes:
    def test_profile_and_tweets(self, client, alice, auth_headers):
        client.post("/api/tweets", json={"content": "hello"}, headers=auth_headers)

        profile = client.get("/api/users/alice").json()
        assert profile["username"] == "alice"
        tweets = client.get("/api/users/alice/tweets").json()
        assert [t["content"] for t in tweets] == ["hello"]

    def test_unknown_profile(self, client):
        assert client.get("/api/users/nobody").status_code == 404

    def test_update_profile(self, client, auth_headers):
        response = client.put("/api/users/profile", json={"bio": "Hi"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["bio"] == "Hi"

    def test_search(self, client, alice, bob):
        results = client.get("/api/users/search?q=ali").json()
        assert [r["username"] for r in results] == ["alice"]
        assert client.get("/api/users/search").status_code == 400

    def test_follow_and_unfollow(self, client, alice, bob):
        response = client.post(f"/api/users/{bob.id}/follow", headers=bearer(alice))
        assert response.json()["message"] == "User followed successfully"
        assert client.post(f"/api/users/{bob.id}/follow", headers=bearer(alice)).status_code == 400

        response = client.delete(f"/api/users/{bob.id}/follow", headers=bearer(alice))
        assert response.json()["message"] == "User unfollowed successfully"

    def test_cannot_follow_self(self, client, alice):
        response = client.post(f"/api/users/{alice.id}/follow", headers=bearer(alice))
        assert response.status_code == 400
        assert response.json()["message"] == "You cannot follow yourself"
