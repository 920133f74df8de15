"""Schemas for channel profiles, relationship listings and watch history."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserCardSchema(Schema):
    """Compact user for subscriber/channel lists."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    avatar_url = fields.String(required=True, data_key="avatar")
    cover_image_url = fields.String(allow_none=True, data_key="coverImage")


class OwnerSchema(Schema):
    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    avatar_url = fields.String(required=True, data_key="avatar")


class ChannelProfileSchema(Schema):
    """Channel page with relationship counts and viewer membership."""

    id = fields.Integer(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    username = fields.String(required=True)
    avatar_url = fields.String(required=True, data_key="avatar")
    cover_image_url = fields.String(allow_none=True, data_key="coverImage")
    email = fields.Email(required=True)
    subscribers_count = fields.Integer(required=True, data_key="subscribersCount")
    subscribed_to_count = fields.Integer(required=True, data_key="channelsSubscribedToCount")
    is_subscribed = fields.Boolean(required=True, data_key="isSubscribed")


class WatchedVideoSchema(Schema):
    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String(allow_none=True)
    thumbnail_url = fields.String(allow_none=True, data_key="thumbnail")
    video_url = fields.String(required=True, data_key="videoFile")
    duration = fields.Integer(required=True)
    views = fields.Integer(required=True)
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    owner = fields.Nested(OwnerSchema, allow_none=True)


class ToggleSchema(Schema):
    subscribed = fields.Boolean(required=True)
