"""Subscription toggle and relationship listings."""

from __future__ import annotations

from flask import Blueprint

from mediahub.api.deps import (
    current_user_id,
    json_response,
    profile_service,
    require_auth,
    subscription_service,
    timing,
)
from mediahub.schemas import ToggleSchema, UserCardSchema

bp = Blueprint("subscriptions", __name__)

toggle_schema = ToggleSchema()
card_list_schema = UserCardSchema(many=True)


@bp.post("/<int:channel_id>")
@require_auth
@timing
def toggle_subscription(channel_id: int):
    """Subscribe the caller to ``channel_id``, or unsubscribe if already subscribed."""

    result = subscription_service().toggle(current_user_id(), channel_id)
    message = "Subscribed successfully" if result.subscribed else "Unsubscribed successfully"
    return json_response(toggle_schema.dump(result), message=message)


@bp.get("/<int:channel_id>/subscribers")
@timing
def channel_subscribers(channel_id: int):
    users = profile_service().channel_subscribers(channel_id)
    return json_response(card_list_schema.dump(users), message="Subscribers fetched successfully")


@bp.get("/<int:user_id>/channels")
@timing
def subscribed_channels(user_id: int):
    users = profile_service().subscribed_channels(user_id)
    return json_response(
        card_list_schema.dump(users), message="Subscribed channels fetched successfully"
    )
