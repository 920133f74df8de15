"""Factory Boy definition for :class:`mediahub.models.user.User`."""

from __future__ import annotations

import factory

from mediahub.core.security import hash_password
from mediahub.models.user import User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"
_DEFAULT_HASH = hash_password(DEFAULT_PASSWORD)


def _hash_for(password: str) -> str:
    # Hashing is slow; reuse one hash for the common case.
    return _DEFAULT_HASH if password == DEFAULT_PASSWORD else hash_password(password)


class UserFactory(BaseFactory):
    """
    Build persisted :class:`mediahub.models.user.User` instances.

    Pass ``password="..."`` to store the hash of a specific password.
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    full_name = factory.LazyAttribute(lambda o: o.username.capitalize())
    password_hash = factory.LazyAttribute(lambda o: _hash_for(o.password))
    avatar_url = factory.LazyAttribute(lambda o: f"https://cdn.test/avatars/{o.username}.png")
    cover_image_url = None
    refresh_token = None
