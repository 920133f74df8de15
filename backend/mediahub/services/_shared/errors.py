"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories,
infrastructure adapters, and application services.

The translation to HTTP responses is handled by
``BaseService.translate_exceptions()`` and ``mediahub/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the message. SQLite only
    reports the offending columns, so ``uq_<table>_<column>`` names are also
    matched against ``<table>.<column>``.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    parts = name.split("_", 2)
    if len(parts) == 3 and parts[0] == "uq":
        return f"{parts[1]}.{parts[2]}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The API layer translates them to ``APIError`` via ``BaseService``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Raised when input is missing or malformed (e.g. blank required field)."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class UnauthorizedError(ServiceError):
    """Raised on bad credentials or an unusable token."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class InvalidSignatureError(UnauthorizedError):
    """Token is malformed, of the wrong type, or its signature does not verify."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class TokenExpiredError(UnauthorizedError):
    """Token signature is valid but its ``exp`` is in the past."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class TokenRevokedError(UnauthorizedError):
    """
    A cryptographically valid refresh token no longer matches stored state.

    Signals that the token was already rotated or the session was logged out,
    i.e. a possible replay of a stolen token.
    """

    def __init__(self, message: str = "Refresh token has been revoked or already used") -> None:
        super().__init__(message)


class InternalError(ServiceError):
    """Storage or collaborator failure with no user-actionable cause."""


class MediaUploadError(InternalError):
    """The media upload service could not be reached or failed server-side."""
