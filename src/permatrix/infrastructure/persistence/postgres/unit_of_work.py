"""PostgreSQL Unit of Work implementation."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from permatrix.domain.exceptions import PersistenceFailure
from permatrix.infrastructure.persistence.postgres.grant_repository import (
    PostgresGrantRepository,
)
from permatrix.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from permatrix.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from permatrix.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)

logger = logging.getLogger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._grants = PostgresGrantRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def grants(self) -> PostgresGrantRepository:
        return self._grants

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Store errors raised anywhere in the unit of work (pool checkout,
    queries, commit) surface as ``PersistenceFailure``.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.Error as e:
            logger.error("Store unavailable: %s", e)
            raise PersistenceFailure("Permission store unavailable") from e

    return factory
