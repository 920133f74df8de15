# mediahub/services/_shared/base.py
from __future__ import annotations

import logging

from mediahub.core import errors as api_errors
from mediahub.services._shared.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)
from mediahub.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation and logging.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Each public method is one request's worth of work; nothing is cached
      on the instance between calls.
    """

    # ---- Configuration defaults (override per subclass if needed) ----
    DEFAULT_READ_ISOLATION = "READ COMMITTED"  # or "REPEATABLE READ"

    def __init__(self) -> None:
        self.log = logging.getLogger(type(self).__module__)

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: ServiceError) -> api_errors.APIError:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: ServiceError
        :returns: Translated exception ready to be rendered.
        :rtype: APIError
        """
        if isinstance(exc, ValidationError):
            # → 400 Bad Request
            return api_errors.BadRequest(str(exc))

        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            # → 409 Conflict
            return api_errors.Conflict(str(exc))

        if isinstance(exc, UnauthorizedError):
            # → 401, keeping the token failure kind visible to clients
            code = {
                "InvalidSignatureError": "invalid_token",
                "TokenExpiredError": "token_expired",
                "TokenRevokedError": "token_revoked",
            }.get(type(exc).__name__, "unauthorized")
            return api_errors.Unauthorized(str(exc), code=code)

        if isinstance(exc, InternalError):
            # → 500, never echo internal detail
            return api_errors.InternalServerError()

        # Any other ServiceError subclass → 400 Bad Request
        return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")
