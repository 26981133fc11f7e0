"""PostgreSQL user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from permatrix.domain.entities import User


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by id."""
        cur = await self._conn.execute(
            "SELECT id, name, email FROM app_user WHERE id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return User(id=r[0], name=r[1], email=r[2])

    async def lock(self, user_id: UUID) -> User | None:
        """Get user by id and hold a row lock until the transaction ends.

        Every writer of the user's roles or direct grants takes this lock
        first, so reads made after it see a stable inherited set.
        """
        cur = await self._conn.execute(
            "SELECT id, name, email FROM app_user WHERE id = %s FOR UPDATE",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return User(id=r[0], name=r[1], email=r[2])
