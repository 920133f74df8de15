"""
SQLAlchemy implementations of the Unit of Work for Flask.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from mediahub.core.extensions import db
from mediahub.repositories import (
    SubscriptionRepository,
    UserRepository,
    VideoRepository,
    WatchHistoryRepository,
)
from mediahub.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Repositories sharing one SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=session)
        self.subscriptions = SubscriptionRepository(session=session)
        self.videos = VideoRepository(session=session)
        self.watch_history = WatchHistoryRepository(session=session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write UoW over the Flask-scoped session.

    Leaving the block normally commits; an exception rolls back and
    propagates.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only UoW over the Flask-scoped session.

    * Blocks ORM flushes and DML/DDL statements for the duration of the block.
    * On PostgreSQL and MySQL, when it owns the transaction, also issues
      ``SET TRANSACTION ISOLATION LEVEL`` and ``SET TRANSACTION READ ONLY``.
    * Never commits. Owned transactions are rolled back on exit; when a
      transaction is already active on the session (e.g. inside a test
      SAVEPOINT) the UoW attaches to it and leaves it untouched.

    Parameters
    ----------
    isolation_level:
        Isolation level hint, ``None`` keeps the connection default.
    enforce_db_readonly:
        Apply ``SET TRANSACTION READ ONLY`` where supported.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
    )
    _SET_TRANSACTION_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(session=db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly
        self._conn: Connection | None = None
        self._txn: SessionTransaction | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        try:
            self._txn = self.session.begin()
        except InvalidRequestError:
            # Already inside a transaction: attach without SET TRANSACTION.
            self._txn = None

        self._conn = self.session.connection()
        self._install_guards()

        if self._txn is not None and self._conn.dialect.name in self._SET_TRANSACTION_DIALECTS:
            try:
                if self.isolation_level:
                    level = self.isolation_level.upper().strip()
                    self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {level}"))
                if self.enforce_db_readonly:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
            except SQLAlchemyError as exc:
                log.warning("SET TRANSACTION failed (%s); relying on write guards.", exc)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn is not None:
                with suppress(SQLAlchemyError):
                    self.session.rollback()
                self._txn = None
        finally:
            self._remove_guards()
            self._conn = None

    def commit(self) -> None:
        """
        :raises RuntimeError: always; read-only units never commit.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Write guards --------------------------------

    def _block_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError("Read-only UnitOfWork: ORM flush blocked.")

    def _block_dml(self, conn, cursor, statement, parameters, context, executemany) -> None:
        first = statement.lstrip().split(None, 1)[0].lower() if statement else ""
        if first.startswith(self._WRITE_PREFIXES):
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {first.upper()}")

    def _install_guards(self) -> None:
        event.listen(self.session, "before_flush", self._block_flush)
        event.listen(self._conn, "before_cursor_execute", self._block_dml)

    def _remove_guards(self) -> None:
        with suppress(InvalidRequestError):
            event.remove(self.session, "before_flush", self._block_flush)
        if self._conn is not None:
            with suppress(InvalidRequestError):
                event.remove(self._conn, "before_cursor_execute", self._block_dml)
