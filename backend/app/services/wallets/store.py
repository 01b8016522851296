from typing import Tuple

from flask import current_app
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from app.errors import PersistenceError
from app.models import UserState


_INSERT_BY_DIALECT = {
    'postgresql': pg_insert,
    'sqlite': sqlite_insert,
}


class UserStateStore:
    """Per-wallet state persisted in the ``user_state`` table.

    The database handle is passed in rather than imported so the app (or a
    test) decides which connection pool backs the store.
    """

    def __init__(self, db):
        self.db = db

    def ensure_schema(self) -> None:
        """Create the table if it does not exist yet."""
        try:
            UserState.__table__.create(bind=self.db.engine, checkfirst=True)
        except SQLAlchemyError as exc:
            current_app.logger.error(f"[store] failed to create user_state table: {exc}", exc_info=True)
            raise PersistenceError('Failed to initialize storage') from exc

    def get(self, wallet: str) -> Tuple[UserState, bool]:
        """Look up ``wallet`` by exact key.

        Returns ``(state, persisted)``. A miss yields a transient zero-value
        record that is never added to the session.
        """
        try:
            state = self.db.session.get(UserState, wallet)
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            current_app.logger.error(f"[store] read failed wallet={wallet}: {exc}", exc_info=True)
            raise PersistenceError('Failed to load data') from exc
        if state is None:
            return UserState(wallet=wallet, credits=0, pending_tbt='0'), False
        return state, True

    def upsert(self, wallet: str, credits, pending_tbt: str) -> None:
        """Insert or replace both mutable fields for ``wallet`` in one statement."""
        try:
            stmt = self._upsert_statement(wallet, credits, pending_tbt)
            self.db.session.execute(stmt)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            current_app.logger.error(f"[store] upsert failed wallet={wallet}: {exc}", exc_info=True)
            raise PersistenceError('Failed to save data') from exc

    def _upsert_statement(self, wallet, credits, pending_tbt):
        table = UserState.__table__
        dialect = self.db.engine.dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            current_app.logger.error(f"[store] no upsert support for dialect={dialect}")
            raise PersistenceError('Failed to save data')
        stmt = insert(table).values({
            table.c.wallet: wallet,
            table.c.credits: credits,
            table.c.pendingtbt: pending_tbt,
        })
        return stmt.on_conflict_do_update(
            index_elements=[table.c.wallet],
            set_={
                table.c.credits: stmt.excluded.credits,
                table.c.pendingtbt: stmt.excluded.pendingtbt,
            },
        )
