"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from mediahub.core.security import hash_password
from mediahub.models.subscription import Subscription
from mediahub.models.user import User
from mediahub.models.video import Video
from mediahub.models.watch_history import WatchHistoryEntry

LOGGER = logging.getLogger(__name__)

AVATAR_BASE = "https://media.example.com/avatars"

USER_FIXTURES: list[dict[str, Any]] = [
    {
        "username": "alice",
        "email": "alice@example.com",
        "full_name": "Alice Moreno",
        "password": "devPass123!",
        "cover": True,
    },
    {
        "username": "bob",
        "email": "bob@example.com",
        "full_name": "Bob Okafor",
        "password": "devPass123!",
        "cover": False,
    },
    {
        "username": "carol",
        "email": "carol@example.com",
        "full_name": "Carol Jensen",
        "password": "devPass123!",
        "cover": True,
    },
    {
        "username": "dave",
        "email": "dave@example.com",
        "full_name": "Dave Liu",
        "password": "devPass123!",
        "cover": False,
    },
]

VIDEO_FIXTURES: list[dict[str, Any]] = [
    {"owner": "alice", "title": "Sourdough from scratch", "duration": 742, "views": 1200},
    {"owner": "alice", "title": "Knife skills 101", "duration": 415, "views": 860},
    {"owner": "bob", "title": "Trail running in the rain", "duration": 1280, "views": 310},
    {"owner": "carol", "title": "Watercolor skies", "duration": 905, "views": 2040},
]

# (subscriber, channel)
SUBSCRIPTION_FIXTURES: list[tuple[str, str]] = [
    ("bob", "alice"),
    ("carol", "alice"),
    ("dave", "alice"),
    ("alice", "bob"),
    ("alice", "carol"),
]

# (viewer, video title); order is the history order, repeats included
HISTORY_FIXTURES: list[tuple[str, str]] = [
    ("alice", "Trail running in the rain"),
    ("alice", "Watercolor skies"),
    ("alice", "Trail running in the rain"),
    ("bob", "Sourdough from scratch"),
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    entry["created" if created else "existing"] += 1


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo accounts keyed by username."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        for fixture in USER_FIXTURES:
            username = str(fixture["username"])
            user = session.execute(select(User).filter_by(username=username)).scalar_one_or_none()
            created = user is None
            if user is None:
                user = User(
                    username=username,
                    email=str(fixture["email"]),
                    full_name=str(fixture["full_name"]),
                    password_hash=hash_password(str(fixture["password"])),
                    avatar_url=f"{AVATAR_BASE}/{username}.png",
                    cover_image_url=(
                        f"{AVATAR_BASE}/{username}-cover.png" if fixture.get("cover") else None
                    ),
                )
                session.add(user)
            _touch(summary, "users", created)
    return summary


def seed_videos(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo videos, matched on ``(owner, title)``."""
    if verbose:
        LOGGER.info("Seeding videos...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        owners = {u.username: u for u in session.execute(select(User)).scalars()}
        for fixture in VIDEO_FIXTURES:
            owner = owners[str(fixture["owner"])]
            video = session.execute(
                select(Video).filter_by(owner_id=owner.id, title=fixture["title"])
            ).scalar_one_or_none()
            created = video is None
            if video is None:
                slug = str(fixture["title"]).lower().replace(" ", "-")
                session.add(
                    Video(
                        owner_id=owner.id,
                        title=fixture["title"],
                        description=f"{fixture['title']} by {owner.full_name}",
                        thumbnail_url=f"https://media.example.com/thumbs/{slug}.jpg",
                        video_url=f"https://media.example.com/videos/{slug}.mp4",
                        duration=int(fixture["duration"]),
                        views=int(fixture["views"]),
                    )
                )
            _touch(summary, "videos", created)
    return summary


def seed_relationships(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Create subscription edges and, for users without history, watch history."""
    if verbose:
        LOGGER.info("Seeding subscriptions and watch history...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    with session.begin():
        users = {u.username: u for u in session.execute(select(User)).scalars()}
        videos = {v.title: v for v in session.execute(select(Video)).scalars()}

        for subscriber, channel in SUBSCRIPTION_FIXTURES:
            filters = {"subscriber_id": users[subscriber].id, "channel_id": users[channel].id}
            edge = session.execute(select(Subscription).filter_by(**filters)).scalar_one_or_none()
            if edge is None:
                session.add(Subscription(**filters))
            _touch(summary, "subscriptions", edge is None)

        seeded_viewers: set[str] = set()
        for viewer, title in HISTORY_FIXTURES:
            user = users[viewer]
            if viewer not in seeded_viewers:
                has_history = session.execute(
                    select(func.count(WatchHistoryEntry.id)).filter_by(user_id=user.id)
                ).scalar_one()
                if has_history:
                    _touch(summary, "watch_history", False)
                    continue
            seeded_viewers.add(viewer)
            session.add(WatchHistoryEntry(user_id=user.id, video_id=videos[title].id))
            session.flush()
            _touch(summary, "watch_history", True)
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func_ in (seed_users, seed_videos, seed_relationships):
        for table, counters in func_(database, verbose=verbose).items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_users", "seed_videos", "seed_relationships", "run_all"]
