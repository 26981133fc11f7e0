"""PostgreSQL direct grant repository implementation."""

import logging
from uuid import UUID

import psycopg
from psycopg import AsyncConnection

from permatrix.domain.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)


class PostgresGrantRepository:
    """user_permission relation - permissions granted directly to users."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_direct(self, user_id: UUID) -> frozenset[str]:
        """List names of permissions granted directly to user."""
        cur = await self._conn.execute(
            "SELECT p.name FROM user_permission up "
            "JOIN permission p ON p.id = up.permission_id "
            "WHERE up.user_id = %s",
            (user_id,),
        )
        rows = await cur.fetchall()
        return frozenset(r[0] for r in rows)

    async def replace_direct(self, user_id: UUID, names: frozenset[str]) -> None:
        """Replace user's direct grants. Must run inside the caller's transaction."""
        try:
            await self._conn.execute(
                "DELETE FROM user_permission WHERE user_id = %s",
                (user_id,),
            )
            if names:
                await self._conn.execute(
                    "INSERT INTO user_permission (user_id, permission_id) "
                    "SELECT %s, id FROM permission WHERE name = ANY(%s)",
                    (user_id, sorted(names)),
                )
        except psycopg.Error as e:
            logger.error("Writing direct grants of user %s failed: %s", user_id, e)
            raise PersistenceFailure("Could not store direct grants") from e

    async def revoke(self, user_id: UUID, name: str) -> None:
        """Remove one direct grant."""
        try:
            await self._conn.execute(
                "DELETE FROM user_permission up USING permission p "
                "WHERE up.permission_id = p.id AND up.user_id = %s AND p.name = %s",
                (user_id, name),
            )
        except psycopg.Error as e:
            logger.error("Revoking %s from user %s failed: %s", name, user_id, e)
            raise PersistenceFailure("Could not revoke direct grant") from e
