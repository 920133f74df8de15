import pytest
from sqlalchemy import text

from mediahub.models.user import User
from mediahub.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from mediahub.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        """
        Ensure that attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_blocks_core_dml(self, session):
        """
        Ensure that raw SQL DML is blocked inside the RO UoW.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="SQL statement blocked"):
            uow.session.execute(
                text("UPDATE users SET refresh_token = :rt"), {"rt": "forged"}
            )

    def test_allows_reads(self, session):
        with RWuow() as uow:
            uow.users.add(UserFactory.build())

        with ROuow() as uow:
            assert uow.session.query(User).count() >= 1

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guards_are_removed_on_exit(self, session):
        """Writes work again once the read-only block is left."""
        with ROuow():
            pass

        with RWuow() as uow:
            user = uow.users.add(UserFactory.build())
        assert session.get(User, user.id) is not None

    def test_attempted_mutation_does_not_persist(self, session):
        with RWuow() as uow:
            user = uow.users.add(UserFactory.build())
            user_id, original_email = user.id, user.email

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            u = uow.session.get(User, user_id)
            u.email = "mutated-in-ro@example.com"
            uow.session.flush()

        session.expire_all()
        assert session.get(User, user_id).email == original_email
