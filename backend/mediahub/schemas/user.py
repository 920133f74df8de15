"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserSchema(Schema):
    """Public representation of a user (never the hash or tokens)."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    avatar_url = fields.String(required=True, data_key="avatar")
    cover_image_url = fields.String(allow_none=True, data_key="coverImage")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")


class LoginResponseSchema(Schema):
    user = fields.Nested(UserSchema, required=True)
    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class UpdateAccountSchema(Schema):
    """``PATCH /users/me`` body; the service requires at least one field."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(load_default=None, data_key="fullName", validate=validate.Length(max=100))
    email = fields.Email(load_default=None, validate=validate.Length(max=254))


class WatchRecordSchema(Schema):
    id = fields.Integer(required=True)
    video_id = fields.Integer(required=True, data_key="videoId")
    watched_at = fields.DateTime(allow_none=True, data_key="watchedAt")
