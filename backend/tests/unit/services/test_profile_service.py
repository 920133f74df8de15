"""ProfileService: channel aggregates, listings and enriched history."""

from __future__ import annotations

import pytest

from mediahub.services import ProfileService
from mediahub.services._shared.errors import NotFoundError
from tests.factories.subscription import SubscriptionFactory, WatchHistoryEntryFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory


@pytest.fixture()
def service() -> ProfileService:
    return ProfileService()


@pytest.fixture()
def network():
    """alice is followed by bob, carol, dave and follows bob and carol."""
    alice, bob, carol, dave = (UserFactory(username=n) for n in ("alice", "bob", "carol", "dave"))
    for follower in (bob, carol, dave):
        SubscriptionFactory(subscriber=follower, channel=alice)
    SubscriptionFactory(subscriber=alice, channel=bob)
    SubscriptionFactory(subscriber=alice, channel=carol)
    return {"alice": alice, "bob": bob, "carol": carol, "dave": dave}


class TestChannelProfile:
    def test_counts_for_viewer(self, service, network):
        profile = service.channel_profile("alice", viewer_id=network["bob"].id)

        assert profile.id == network["alice"].id
        assert profile.subscribers_count == 3
        assert profile.subscribed_to_count == 2
        assert profile.is_subscribed is True

    def test_viewer_not_subscribed(self, service, network):
        profile = service.channel_profile("bob", viewer_id=network["dave"].id)

        assert profile.subscribers_count == 1
        assert profile.subscribed_to_count == 1
        assert profile.is_subscribed is False

    def test_anonymous_viewer(self, service, network):
        assert service.channel_profile("alice").is_subscribed is False

    def test_viewer_on_own_channel(self, service, network):
        profile = service.channel_profile("alice", viewer_id=network["alice"].id)
        assert profile.is_subscribed is False

    def test_lookup_is_case_insensitive(self, service, network):
        assert service.channel_profile("  ALICE ").username == "alice"

    def test_user_without_edges(self, service):
        UserFactory(username="loner")
        profile = service.channel_profile("loner")
        assert (profile.subscribers_count, profile.subscribed_to_count) == (0, 0)

    @pytest.mark.parametrize("username", ["", "   ", "ghost"])
    def test_unknown_or_blank_username(self, service, username):
        with pytest.raises(NotFoundError):
            service.channel_profile(username)


class TestListings:
    def test_subscribers_of_channel(self, service, network):
        names = [u.username for u in service.channel_subscribers(network["alice"].id)]
        assert names == ["bob", "carol", "dave"]

    def test_channels_of_subscriber(self, service, network):
        names = [u.username for u in service.subscribed_channels(network["alice"].id)]
        assert names == ["bob", "carol"]

    def test_listing_direction(self, service, network):
        assert [u.username for u in service.subscribed_channels(network["dave"].id)] == ["alice"]
        assert service.channel_subscribers(network["dave"].id) == []

    def test_unknown_ids(self, service):
        with pytest.raises(NotFoundError):
            service.channel_subscribers(31_337)
        with pytest.raises(NotFoundError):
            service.subscribed_channels(31_337)


class TestWatchHistory:
    def test_order_and_duplicates_are_kept(self, service):
        user = UserFactory()
        owner = UserFactory(username="maker")
        v1, v2 = VideoFactory(owner=owner, title="First"), VideoFactory(owner=owner, title="Second")
        for video in (v1, v2, v1):
            WatchHistoryEntryFactory(user=user, video=video)

        items = service.watch_history(user.id)

        assert [i.title for i in items] == ["First", "Second", "First"]
        assert items[0].owner.username == "maker"
        assert items[0].video_url == v1.video_url

    def test_missing_video_is_omitted(self, service, session):
        user = UserFactory()
        kept, gone = VideoFactory(), VideoFactory()
        WatchHistoryEntryFactory(user=user, video=kept)
        WatchHistoryEntryFactory(user=user, video=gone)
        session.delete(gone)
        session.flush()

        items = service.watch_history(user.id)
        assert [i.id for i in items] == [kept.id]

    def test_missing_owner_gives_null_owner(self, service):
        user = UserFactory()
        WatchHistoryEntryFactory(user=user, video=VideoFactory(owner=None))

        (item,) = service.watch_history(user.id)
        assert item.owner is None

    def test_empty_history(self, service):
        assert service.watch_history(UserFactory().id) == []

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.watch_history(27_182)
