"""Public channel profile."""

from __future__ import annotations

from flask import Blueprint

from mediahub.api.deps import current_user_id, json_response, optional_auth, profile_service, timing
from mediahub.schemas import ChannelProfileSchema

bp = Blueprint("channels", __name__)

channel_schema = ChannelProfileSchema()


@bp.get("/<string:username>")
@optional_auth
@timing
def channel_profile(username: str):
    """Channel page; ``isSubscribed`` reflects the caller when authenticated."""

    profile = profile_service().channel_profile(username, viewer_id=current_user_id())
    return json_response(channel_schema.dump(profile), message="Channel fetched successfully")
