"""Stateless password helpers.

Hashing lives here rather than on the ``User`` model so that records stay
plain data and callers pass the stored hash explicitly.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(raw: str) -> str:
    """
    Hash a plain text password.

    :param raw: Plain text password.
    :type raw: str
    :returns: Salted hash suitable for storage.
    :rtype: str
    :raises ValueError: If ``raw`` is empty or not a string.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(raw)


def verify_password(password_hash: str | None, raw: str | None) -> bool:
    """
    Check a plain text candidate against a stored hash.

    A missing hash or candidate never matches.

    :param password_hash: Stored hash (may be ``None`` for legacy rows).
    :type password_hash: str | None
    :param raw: Plain text candidate.
    :type raw: str | None
    :returns: ``True`` if it matches; otherwise ``False``.
    :rtype: bool
    """
    if not password_hash or not raw:
        return False
    # ``check_password_hash`` is untyped; coerce to bool for mypy.
    return bool(check_password_hash(password_hash, raw))
