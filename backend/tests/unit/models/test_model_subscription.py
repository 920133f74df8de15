"""Constraint tests for subscription edges."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from mediahub.models import Subscription
from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory


class TestSubscriptionModel:
    def test_pair_is_unique(self, session):
        """A second edge for the same (subscriber, channel) pair is rejected."""
        a, b = UserFactory(), UserFactory()
        SubscriptionFactory(subscriber=a, channel=b)

        with pytest.raises(IntegrityError), session.begin_nested():
            session.add(Subscription(subscriber_id=a.id, channel_id=b.id))
            session.flush()

    def test_same_subscriber_many_channels(self, session):
        """Uniqueness is on the pair, not on either column alone."""
        a, b, c = UserFactory(), UserFactory(), UserFactory()
        SubscriptionFactory(subscriber=a, channel=b)
        SubscriptionFactory(subscriber=a, channel=c)
        SubscriptionFactory(subscriber=c, channel=b)

        assert session.query(Subscription).filter_by(subscriber_id=a.id).count() == 2
        assert session.query(Subscription).filter_by(channel_id=b.id).count() == 2

    def test_self_subscription_is_rejected(self, session):
        a = UserFactory()
        with pytest.raises(IntegrityError), session.begin_nested():
            session.add(Subscription(subscriber_id=a.id, channel_id=a.id))
            session.flush()

    def test_created_at_is_set(self, session):
        edge = SubscriptionFactory()
        session.refresh(edge)
        assert edge.created_at is not None
