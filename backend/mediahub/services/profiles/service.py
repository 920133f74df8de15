"""
ProfileService
==============

Read-only aggregate views over users, subscription edges and watch history.
Every method runs in a read-only Unit of Work.
"""

from __future__ import annotations

from mediahub.repositories.user import normalize_identifier
from mediahub.services._shared.base import BaseService
from mediahub.services._shared.errors import NotFoundError
from mediahub.services.profiles.dto import ChannelProfileOut, UserCardOut, WatchedVideoOut


class ProfileService(BaseService):
    """
    Channel profiles, relationship listings and enriched watch history.
    """

    def channel_profile(self, username: str, viewer_id: int | None = None) -> ChannelProfileOut:
        """
        Build the channel page for ``username``.

        :param username: Channel handle (case-insensitive).
        :param viewer_id: Authenticated viewer, or ``None`` for anonymous.
        :raises NotFoundError: Blank or unknown username.
        """
        handle = normalize_identifier(username)
        if not handle:
            raise NotFoundError("Channel", username or "")

        with self.ro_uow() as uow:
            user = uow.users.get_by_username(handle)
            if user is None:
                raise NotFoundError("Channel", handle)

            subs = uow.subscriptions
            return ChannelProfileOut(
                id=user.id,
                full_name=user.full_name,
                username=user.username,
                avatar_url=user.avatar_url,
                cover_image_url=user.cover_image_url,
                email=user.email,
                subscribers_count=subs.count_subscribers(user.id),
                subscribed_to_count=subs.count_subscriptions(user.id),
                is_subscribed=viewer_id is not None and subs.exists_edge(viewer_id, user.id),
            )

    def channel_subscribers(self, channel_id: int) -> list[UserCardOut]:
        """
        Users following ``channel_id``, oldest subscription first.

        :raises NotFoundError: Unknown channel.
        """
        with self.ro_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            return [UserCardOut.from_model(u) for u in uow.subscriptions.list_subscribers(channel_id)]

    def subscribed_channels(self, subscriber_id: int) -> list[UserCardOut]:
        """
        Channels ``subscriber_id`` follows, oldest subscription first.

        :raises NotFoundError: Unknown subscriber.
        """
        with self.ro_uow() as uow:
            if uow.users.get(subscriber_id) is None:
                raise NotFoundError("User", subscriber_id)
            return [UserCardOut.from_model(u) for u in uow.subscriptions.list_channels(subscriber_id)]

    def watch_history(self, user_id: int) -> list[WatchedVideoOut]:
        """
        Watch history in insertion order, duplicates kept.

        Entries whose video no longer exists are skipped.

        :raises NotFoundError: Unknown user.
        """
        with self.ro_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id)

            items: list[WatchedVideoOut] = []
            for row in uow.watch_history.list_enriched(user_id):
                if row.video is None:
                    self.log.debug(
                        "watch_history.missing_video video_id=%s",
                        row.entry.video_id,
                        extra={"user_id": user_id},
                    )
                    continue
                items.append(WatchedVideoOut.from_model(row.video, row.owner))
            return items
