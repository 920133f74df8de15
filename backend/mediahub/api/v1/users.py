"""Account, session and watch-history endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from mediahub.api.deps import (
    REFRESH_COOKIE,
    auth_service,
    clear_auth_cookies,
    current_user_id,
    json_response,
    media_file,
    profile_service,
    require_auth,
    set_auth_cookies,
    timing,
)
from mediahub.core.extensions import limiter
from mediahub.schemas import (
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    UserSchema,
    WatchedVideoSchema,
    WatchRecordSchema,
)
from mediahub.services import (
    ChangePasswordIn,
    LoginIn,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
    UpdateAccountIn,
)

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
change_password_schema = ChangePasswordSchema()
refresh_schema = RefreshSchema()
token_pair_schema = TokenPairSchema()
update_account_schema = UpdateAccountSchema()
user_schema = UserSchema()
watch_record_schema = WatchRecordSchema()
history_schema = WatchedVideoSchema(many=True)


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


# ------------------------------ Registration ---------------------------------


@bp.post("")
@timing
def register():
    """Create an account from multipart fields plus ``avatar``/``coverImage`` files."""

    form = request.form.to_dict() or request.get_json(silent=True) or {}
    data = register_schema.load(form)
    user = auth_service().register(
        RegisterIn(
            full_name=data["full_name"],
            username=data["username"],
            email=data["email"],
            password=data["password"],
            avatar=media_file("avatar"),
            cover_image=media_file("coverImage"),
        )
    )
    return json_response(user_schema.dump(user), status=201, message="User registered successfully")


# -------------------------------- Sessions -----------------------------------


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Verify credentials and set the session cookies."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = auth_service().login(
        LoginIn(password=data["password"], username=data["username"], email=data["email"])
    )
    response = json_response(
        login_response_schema.dump(result), message="User logged in successfully"
    )
    return set_auth_cookies(
        response,
        TokenPairOut(access_token=result.access_token, refresh_token=result.refresh_token),
    )


@bp.post("/logout")
@require_auth
@timing
def logout():
    auth_service().logout(current_user_id())
    return clear_auth_cookies(json_response({}, message="User logged out"))


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token from the cookie, else from the JSON body."""

    body = refresh_schema.load(request.get_json(silent=True) or {})
    presented = request.cookies.get(REFRESH_COOKIE) or body["refresh_token"]
    pair = auth_service().refresh(RefreshIn(refresh_token=presented))
    response = json_response(token_pair_schema.dump(pair), message="Access token refreshed")
    return set_auth_cookies(response, pair)


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = change_password_schema.load(request.get_json(silent=True) or {})
    auth_service().change_password(
        ChangePasswordIn(
            user_id=current_user_id(),
            old_password=data["old_password"],
            new_password=data["new_password"],
        )
    )
    return json_response({}, message="Password changed successfully")


# -------------------------------- Account ------------------------------------


@bp.get("/me")
@require_auth
@timing
def me():
    user = auth_service().current_user(current_user_id())
    return json_response(user_schema.dump(user), message="User fetched successfully")


@bp.patch("/me")
@require_auth
@timing
def update_me():
    data = update_account_schema.load(request.get_json(silent=True) or {})
    user = auth_service().update_account(
        UpdateAccountIn(user_id=current_user_id(), full_name=data["full_name"], email=data["email"])
    )
    return json_response(user_schema.dump(user), message="Account details updated successfully")


@bp.patch("/me/avatar")
@require_auth
@timing
def update_avatar():
    user = auth_service().update_avatar(current_user_id(), media_file("avatar"))
    return json_response(user_schema.dump(user), message="Avatar updated successfully")


@bp.patch("/me/cover-image")
@require_auth
@timing
def update_cover_image():
    user = auth_service().update_cover_image(current_user_id(), media_file("coverImage"))
    return json_response(user_schema.dump(user), message="Cover image updated successfully")


# ----------------------------- Watch history ---------------------------------


@bp.get("/history")
@require_auth
@timing
def watch_history():
    items = profile_service().watch_history(current_user_id())
    return json_response(history_schema.dump(items), message="Watch history fetched successfully")


@bp.post("/history/<int:video_id>")
@require_auth
@timing
def record_watch(video_id: int):
    record = auth_service().record_watch(current_user_id(), video_id)
    return json_response(watch_record_schema.dump(record), status=201, message="Watch recorded")
