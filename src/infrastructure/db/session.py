from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork


def _serialize_sqlite_transactions(engine: AsyncEngine) -> None:
    """Take the SQLite write lock when a transaction starts.

    The driver otherwise defers BEGIN until the first write, which lets two
    transactions read the same counters before either one writes. Issuing our
    own BEGIN also makes SAVEPOINT usable.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine(database_url: str) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        _serialize_sqlite_transactions(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.tokens = None
        self.proposals = None
        self.registry = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.membership_tokens_sqlalchemy import (
            MembershipTokensSQLAlchemyRepository,
        )
        from src.infrastructure.repos.proposals_sqlalchemy import ProposalsSQLAlchemyRepository
        from src.infrastructure.repos.registry_state_sqlalchemy import (
            RegistryStateSQLAlchemyRepository,
        )

        self.tokens = MembershipTokensSQLAlchemyRepository(self.session)
        self.proposals = ProposalsSQLAlchemyRepository(self.session)
        self.registry = RegistryStateSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.tokens = None
            self.proposals = None
            self.registry = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
