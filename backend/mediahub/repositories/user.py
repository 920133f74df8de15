"""User repository: lookups and single-column credential writes."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update

from mediahub.models.user import User
from mediahub.repositories.base import BaseRepository, affected_rows


def normalize_identifier(value: str | None) -> str:
    """Lowercase and trim a username/email; ``None`` becomes ``""``."""
    return (value or "").strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Credential columns (``password_hash``, ``refresh_token``) are written with
    targeted ``UPDATE`` statements so a write never rewrites the whole row
    and conditional writes stay atomic.
    """

    model = User

    # ---------------------------- Whitelist ----------------------------

    def _updatable_fields(self):
        """Profile fields only; credentials have dedicated writers."""
        return {"email", "full_name", "avatar_url", "cover_image_url"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username (case-insensitive, trimmed).

        :param username: Username to normalise and search.
        :type username: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.username == normalize_identifier(username))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive, trimmed)."""
        stmt = select(User).where(User.email == normalize_identifier(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """Return the first user matching either identifier.

        Blank identifiers are ignored; with none left the result is ``None``.
        """
        clauses = []
        if normalize_identifier(username):
            clauses.append(User.username == normalize_identifier(username))
        if normalize_identifier(email):
            clauses.append(User.email == normalize_identifier(email))
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id.asc()).limit(1)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_username_or_email(self, *, username: str, email: str) -> bool:
        """Return ``True`` when either identifier is already taken."""
        return self.find_by_username_or_email(username=username, email=email) is not None

    def exists_by_email(self, email: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when another user owns ``email``."""
        stmt = select(User.id).where(User.email == normalize_identifier(email))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    # ---------------------------- Credential writes ----------------------------

    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        """Overwrite only ``password_hash``.

        :returns: ``True`` when the user row exists.
        :rtype: bool
        """
        stmt = update(User).where(User.id == user_id).values(password_hash=password_hash)
        return affected_rows(self.session.execute(stmt)) == 1

    def set_refresh_token(self, user_id: int, token: str) -> bool:
        """Unconditionally store ``token`` as the live refresh token."""
        stmt = update(User).where(User.id == user_id).values(refresh_token=token)
        return affected_rows(self.session.execute(stmt)) == 1

    def swap_refresh_token(self, user_id: int, *, presented: str, new: str) -> bool:
        """Compare-and-swap the live refresh token.

        Single statement::

            UPDATE users SET refresh_token = :new
            WHERE id = :user_id AND refresh_token = :presented

        :param user_id: Owner of the token.
        :type user_id: int
        :param presented: Token the client presented.
        :type presented: str
        :param new: Replacement token.
        :type new: str
        :returns: ``True`` if exactly one row was swapped; ``False`` when the
            stored token differs (already rotated, logged out, or replaced by a
            newer login).
        :rtype: bool
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token == presented)
            .values(refresh_token=new)
        )
        return affected_rows(self.session.execute(stmt)) == 1

    def clear_refresh_token(self, user_id: int) -> bool:
        """Set ``refresh_token`` to SQL ``NULL``."""
        stmt = update(User).where(User.id == user_id).values(refresh_token=None)
        return affected_rows(self.session.execute(stmt)) == 1
