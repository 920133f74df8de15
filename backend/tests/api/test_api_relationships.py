"""HTTP tests for subscription toggling, listings and channel profiles."""

from __future__ import annotations

import pytest

from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def auth(token_service):
    def _headers(user) -> dict[str, str]:
        token = token_service.issue_pair(user.id).access_token
        return {"Authorization": f"Bearer {token}"}

    return _headers


def test_toggle_subscribe_then_unsubscribe(client, session, auth):
    viewer, channel = UserFactory(), UserFactory()

    first = client.post(f"/api/v1/subscriptions/{channel.id}", headers=auth(viewer))
    second = client.post(f"/api/v1/subscriptions/{channel.id}", headers=auth(viewer))

    assert first.status_code == 200
    assert first.get_json()["data"] == {"subscribed": True}
    assert first.get_json()["message"] == "Subscribed successfully"
    assert second.get_json()["data"] == {"subscribed": False}
    assert second.get_json()["message"] == "Unsubscribed successfully"


def test_toggle_requires_authentication(client, session):
    channel = UserFactory()
    resp = client.post(f"/api/v1/subscriptions/{channel.id}")
    assert resp.status_code == 401


def test_toggle_own_channel(client, session, auth):
    me = UserFactory()
    resp = client.post(f"/api/v1/subscriptions/{me.id}", headers=auth(me))
    assert resp.status_code == 400


def test_toggle_unknown_channel(client, session, auth):
    me = UserFactory()
    session.commit()
    resp = client.post("/api/v1/subscriptions/987654", headers=auth(me))
    assert resp.status_code == 404


def test_listings(client, session):
    alice, bob, carol = (UserFactory(username=n) for n in ("alice", "bob", "carol"))
    SubscriptionFactory(subscriber=bob, channel=alice)
    SubscriptionFactory(subscriber=carol, channel=alice)
    SubscriptionFactory(subscriber=alice, channel=bob)

    subscribers = client.get(f"/api/v1/subscriptions/{alice.id}/subscribers").get_json()["data"]
    channels = client.get(f"/api/v1/subscriptions/{alice.id}/channels").get_json()["data"]

    assert [u["username"] for u in subscribers] == ["bob", "carol"]
    assert [u["username"] for u in channels] == ["bob"]
    assert set(subscribers[0]) == {"id", "username", "fullName", "avatar", "coverImage"}


def test_listing_unknown_channel(client):
    resp = client.get("/api/v1/subscriptions/123123/subscribers")
    assert resp.status_code == 404


def test_channel_profile_anonymous_and_authenticated(client, session, auth):
    alice, bob, carol, dave = (UserFactory(username=n) for n in ("alice", "bob", "carol", "dave"))
    for follower in (bob, carol, dave):
        SubscriptionFactory(subscriber=follower, channel=alice)
    SubscriptionFactory(subscriber=alice, channel=bob)
    SubscriptionFactory(subscriber=alice, channel=carol)

    anonymous = client.get("/api/v1/channels/alice").get_json()["data"]
    as_bob = client.get("/api/v1/channels/ALICE", headers=auth(bob)).get_json()["data"]

    assert anonymous["subscribersCount"] == 3
    assert anonymous["channelsSubscribedToCount"] == 2
    assert anonymous["isSubscribed"] is False
    assert as_bob["isSubscribed"] is True
    assert as_bob["username"] == "alice"


def test_channel_profile_not_found(client):
    resp = client.get("/api/v1/channels/nobody")

    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"


def test_unknown_route(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert "not found" in resp.get_json()["message"]
