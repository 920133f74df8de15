# mediahub/services/auth/service.py
from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from mediahub.core.security import hash_password, verify_password
from mediahub.models.user import User
from mediahub.repositories.user import normalize_identifier
from mediahub.services._shared.base import BaseService
from mediahub.services._shared.errors import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    violates,
)
from mediahub.services._shared.ports import MediaFile, MediaUploader
from mediahub.services.auth.dto import (
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisterIn,
    UpdateAccountIn,
    UserPublicOut,
    WatchRecordOut,
)
from mediahub.services.tokens import TokenPairOut, TokenService


def _conflict_from_integrity(exc: IntegrityError) -> ConflictError | None:
    if violates(exc, "uq_users_email"):
        return ConflictError("User", "email already in use")
    if violates(exc, "uq_users_username"):
        return ConflictError("User", "username already in use")
    return None


class AuthService(BaseService):
    """
    Account lifecycle: registration, login/logout, password and profile edits.

    Token issuance and rotation are delegated to :class:`TokenService`; file
    storage to the injected :class:`MediaUploader`.
    """

    def __init__(self, *, token_service: TokenService, media_uploader: MediaUploader) -> None:
        super().__init__()
        self.tokens = token_service
        self.media = media_uploader

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Create an account.

        :param dto: Registration input.
        :returns: Public projection of the new user.
        :raises ValidationError: Blank field, missing avatar or failed avatar upload.
        :raises ConflictError: Username or email already taken.
        """
        full_name = (dto.full_name or "").strip()
        username = normalize_identifier(dto.username)
        email = normalize_identifier(dto.email)
        if not all([full_name, username, email, (dto.password or "").strip()]):
            raise ValidationError("All fields are required")

        with self.ro_uow() as uow:
            if uow.users.exists_username_or_email(username=username, email=email):
                raise ConflictError("User", "username or email already in use")

        if dto.avatar is None:
            raise ValidationError("Avatar file is required")
        avatar_url = self.media.upload(dto.avatar)
        if not avatar_url:
            raise ValidationError("Avatar file is required")
        cover_url = self.media.upload(dto.cover_image) if dto.cover_image else None

        with self.rw_uow() as uow:
            try:
                user = User(
                    username=username,
                    email=email,
                    full_name=full_name,
                    password_hash=hash_password(dto.password),
                    avatar_url=avatar_url,
                    cover_image_url=cover_url or None,
                )
                uow.users.add(user)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                conflict = _conflict_from_integrity(exc)
                if conflict is None:
                    raise
                raise conflict from exc

            out = UserPublicOut.from_model(user)

        self.log.info("user.registered", extra={"user_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Sessions
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and open a session.

        :raises ValidationError: Neither username nor email given.
        :raises NotFoundError: No user matches.
        :raises UnauthorizedError: Wrong password.
        """
        if not normalize_identifier(dto.username) and not normalize_identifier(dto.email):
            raise ValidationError("username or email is required")

        with self.ro_uow() as uow:
            user = uow.users.find_by_username_or_email(username=dto.username, email=dto.email)
            if user is None:
                raise NotFoundError("User", dto.username or dto.email or "")
            if not verify_password(user.password_hash, dto.password):
                raise UnauthorizedError("Invalid user credentials")
            public = UserPublicOut.from_model(user)

        pair = self.tokens.issue_session(public.id)
        return LoginOut(
            user=public,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    def logout(self, user_id: int) -> None:
        """
        Clear the stored refresh token (set to ``NULL``).

        :raises NotFoundError: Unknown user.
        """
        with self.rw_uow() as uow:
            if not uow.users.clear_refresh_token(user_id):
                raise NotFoundError("User", user_id)
        self.log.info("session.closed", extra={"user_id": user_id})

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Rotate the presented refresh token.

        :raises UnauthorizedError: Missing token, or any token failure subclass.
        """
        if not dto.refresh_token:
            raise UnauthorizedError("Unauthorized request")
        return self.tokens.rotate(dto.refresh_token)

    # ------------------------------------------------------------------ #
    # Password
    # ------------------------------------------------------------------ #

    def change_password(self, dto: ChangePasswordIn) -> None:
        """
        Replace the password hash after checking the old password.

        Only ``password_hash`` is written.

        :raises ValidationError: Blank new password.
        :raises UnauthorizedError: Old password does not match.
        :raises NotFoundError: Unknown user.
        """
        if not (dto.new_password or "").strip():
            raise ValidationError("New password is required")

        with self.rw_uow() as uow:
            user = uow.users.get(dto.user_id)
            if user is None:
                raise NotFoundError("User", dto.user_id)
            if not verify_password(user.password_hash, dto.old_password):
                raise UnauthorizedError("Invalid old password")
            uow.users.update_password_hash(user.id, hash_password(dto.new_password))

    # ------------------------------------------------------------------ #
    # Account
    # ------------------------------------------------------------------ #

    def current_user(self, user_id: int) -> UserPublicOut:
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)

    def update_account(self, dto: UpdateAccountIn) -> UserPublicOut:
        """
        Update ``full_name`` and/or ``email``.

        :raises ValidationError: Both fields blank or email malformed.
        :raises ConflictError: Email owned by another user.
        """
        fields: dict[str, str] = {}
        if (dto.full_name or "").strip():
            fields["full_name"] = dto.full_name.strip()
        if normalize_identifier(dto.email):
            fields["email"] = normalize_identifier(dto.email)
        if not fields:
            raise ValidationError("fullName or email is required")

        with self.rw_uow() as uow:
            user = uow.users.get(dto.user_id)
            if user is None:
                raise NotFoundError("User", dto.user_id)
            if "email" in fields and uow.users.exists_by_email(
                fields["email"], exclude_id=user.id
            ):
                raise ConflictError("User", "email already in use")
            try:
                uow.users.update(user, **fields)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                conflict = _conflict_from_integrity(exc)
                if conflict is None:
                    raise
                raise conflict from exc
            return UserPublicOut.from_model(user)

    def update_avatar(self, user_id: int, media: MediaFile | None) -> UserPublicOut:
        """
        :raises ValidationError: File missing or upload yielded no URL.
        """
        return self._replace_image(user_id, media, field="avatar_url", label="Avatar")

    def update_cover_image(self, user_id: int, media: MediaFile | None) -> UserPublicOut:
        """
        :raises ValidationError: File missing or upload yielded no URL.
        """
        return self._replace_image(user_id, media, field="cover_image_url", label="Cover image")

    def _replace_image(
        self, user_id: int, media: MediaFile | None, *, field: str, label: str
    ) -> UserPublicOut:
        if media is None:
            raise ValidationError(f"{label} file is missing")
        url = self.media.upload(media)
        if not url:
            raise ValidationError(f"Error while uploading {label.lower()}")

        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.update(user, **{field: url})
            return UserPublicOut.from_model(user)

    # ------------------------------------------------------------------ #
    # Watch history
    # ------------------------------------------------------------------ #

    def record_watch(self, user_id: int, video_id: int) -> WatchRecordOut:
        """
        Append ``video_id`` to the user's watch history.

        :raises NotFoundError: Unknown user or video.
        """
        with self.rw_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id)
            if not uow.videos.exists_id(video_id):
                raise NotFoundError("Video", video_id)
            entry = uow.watch_history.append(user_id, video_id)
            return WatchRecordOut(id=entry.id, video_id=entry.video_id, watched_at=entry.watched_at)
