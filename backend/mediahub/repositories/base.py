"""Generic repository base for SQLAlchemy 2.x.

Shared persistence-only concerns:

- Equality filters restricted to a per-repository whitelist.
- Whitelisted attribute updates (no mass-assignment).
- Row-count helpers for single-statement conditional writes.

Repositories never commit or roll back; services own the Unit of Work.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.engine import CursorResult
from sqlalchemy.orm import InstrumentedAttribute, Session

from mediahub.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


def affected_rows(result: Any) -> int:
    """Return the number of rows matched by an executed DML statement.

    :param result: Result of ``session.execute(update(...)/delete(...))``.
    :returns: ``rowcount`` as an int (``0`` when the driver reports none).
    :rtype: int
    """
    rowcount = cast(CursorResult[Any], result).rowcount
    return int(rowcount) if rowcount and rowcount > 0 else 0


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``. They MAY override
    ``_filterable_fields`` and ``_updatable_fields``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Bind the repository to a session.

        Without an explicit session the Flask-scoped ``db.session`` is used.

        :param session: Session shared across the Unit of Work scope.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, else the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        """Public filter key → ORM attribute mapping. Unknown keys are ignored."""
        return {}

    def _updatable_fields(self) -> set[str]:
        """Attribute names that :meth:`update` may assign."""
        return set()

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self,
        stmt: Select[Any],
        filters: Mapping[str, Any] | None,
    ) -> Select[Any]:
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        clauses = [allowed[k] == v for k, v in filters.items() if k in allowed]
        return stmt.where(and_(*clauses)) if clauses else stmt

    def _sanitize_update_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``fields`` restricted to the whitelist.

        :raises ValueError: If unknown keys are present or nothing is updatable.
        """
        allowed = self._updatable_fields()
        if fields and not allowed:
            raise ValueError("No updatable fields configured for this repository.")
        unknown = sorted(k for k in fields if k not in allowed)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return dict(fields)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush to materialize its primary key.

        :param instance: New entity instance.
        :type instance: E
        :returns: The same instance after ``flush()``.
        :rtype: E
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        return self.session.get(self.model, entity_id)

    def exists(self, **filters: Any) -> bool:
        """Return ``True`` when at least one row matches the equality filters."""
        stmt: Select[Any] = select(func.count()).select_from(self.model)
        stmt = self._apply_equality_filters(stmt, filters)
        return bool(self.session.execute(stmt).scalar_one())

    def flush(self) -> None:
        """Flush pending changes without committing."""
        self.session.flush()

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted attributes and flush.

        Assignment goes through ``setattr`` so model ``@validates`` hooks run.

        :param instance: Entity to mutate.
        :type instance: E
        :param fields: Attribute values to assign.
        :returns: The mutated instance.
        :rtype: E
        :raises ValueError: On non-whitelisted keys.
        """
        for key, value in self._sanitize_update_fields(fields).items():
            setattr(instance, key, value)
        self.flush()
        return instance

