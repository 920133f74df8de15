"""``flask seed`` commands against the transactional test database."""

from __future__ import annotations

import pytest

from mediahub.core.extensions import db
from mediahub.models import Subscription, User, WatchHistoryEntry
from mediahub.seeds import seed_data
from mediahub.services import ProfileService


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


def test_run_all_builds_demo_network(session):
    summary = seed_data.run_all(db)

    assert summary["users"]["created"] == len(seed_data.USER_FIXTURES)
    assert summary["subscriptions"]["created"] == len(seed_data.SUBSCRIPTION_FIXTURES)

    profile = ProfileService().channel_profile("alice")
    assert (profile.subscribers_count, profile.subscribed_to_count) == (3, 2)
    titles = [v.title for v in ProfileService().watch_history(profile.id)]
    assert titles == [t for viewer, t in seed_data.HISTORY_FIXTURES if viewer == "alice"]


def test_run_all_is_idempotent(session):
    seed_data.run_all(db)
    summary = seed_data.run_all(db)

    assert summary["users"] == {"created": 0, "existing": len(seed_data.USER_FIXTURES)}
    assert summary["subscriptions"]["created"] == 0
    assert session.query(Subscription).count() == len(seed_data.SUBSCRIPTION_FIXTURES)
    assert session.query(WatchHistoryEntry).count() == len(seed_data.HISTORY_FIXTURES)


def test_seed_run_command(runner, session):
    result = runner.invoke(args=["seed", "run"])

    assert result.exit_code == 0, result.output
    assert "Seed summary:" in result.output
    assert session.query(User).filter_by(username="alice").count() == 1


def test_seed_fresh_requires_confirmation(runner, session):
    result = runner.invoke(args=["seed", "fresh"], input="n\n")

    assert result.exit_code != 0
    assert session.query(User).count() == 0
