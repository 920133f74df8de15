# mediahub/services/subscriptions/service.py
from __future__ import annotations

from mediahub.services._shared.base import BaseService
from mediahub.services._shared.errors import NotFoundError, ValidationError
from mediahub.services.subscriptions.dto import ToggleOut


class SubscriptionService(BaseService):
    """
    Directed subscriber → channel edges.

    Edges are created or removed by :meth:`toggle` only; there is no update.
    """

    def toggle(self, subscriber_id: int, channel_id: int) -> ToggleOut:
        """
        Subscribe if the ``(subscriber, channel)`` edge is absent, else unsubscribe.

        Keyed on the pair: toggling ``(a, b)`` never affects ``(a, c)``.

        :raises ValidationError: ``subscriber_id == channel_id``.
        :raises NotFoundError: Channel user does not exist.
        """
        if subscriber_id == channel_id:
            raise ValidationError("Cannot subscribe to your own channel")

        with self.rw_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id)
            subscribed = uow.subscriptions.toggle(subscriber_id, channel_id)

        self.log.info(
            "subscription.%s" % ("created" if subscribed else "removed"),
            extra={"user_id": subscriber_id, "channel_id": channel_id},
        )
        return ToggleOut(subscribed=subscribed)

    def is_subscribed(self, subscriber_id: int, channel_id: int) -> bool:
        with self.ro_uow() as uow:
            return uow.subscriptions.exists_edge(subscriber_id, channel_id)
