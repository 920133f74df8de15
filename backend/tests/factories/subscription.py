"""Factory Boy definitions for relationship rows (subscriptions, history)."""

from __future__ import annotations

import factory

from mediahub.models.subscription import Subscription
from mediahub.models.watch_history import WatchHistoryEntry
from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from tests.factories.video import VideoFactory


class SubscriptionFactory(BaseFactory):
    """
    Persist a ``subscriber → channel`` edge.

    Pass ``subscriber=`` / ``channel=`` users, or let the factory create them.
    """

    class Meta:
        model = Subscription

    class Params:
        subscriber = factory.SubFactory(UserFactory)
        channel = factory.SubFactory(UserFactory)

    id = None
    subscriber_id = factory.SelfAttribute("subscriber.id")
    channel_id = factory.SelfAttribute("channel.id")


class WatchHistoryEntryFactory(BaseFactory):
    class Meta:
        model = WatchHistoryEntry

    class Params:
        user = factory.SubFactory(UserFactory)
        video = factory.SubFactory(VideoFactory)

    id = None
    user_id = factory.SelfAttribute("user.id")
    video_id = factory.SelfAttribute("video.id")
