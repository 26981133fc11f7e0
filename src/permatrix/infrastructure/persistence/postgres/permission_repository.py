"""PostgreSQL permission catalog repository implementation."""

from collections.abc import Iterable
from uuid import uuid4

from psycopg import AsyncConnection

from permatrix.domain.entities import Permission


class PostgresPermissionRepository:
    """Permission rows known to the store."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_names(self) -> frozenset[str]:
        """List all permission names."""
        cur = await self._conn.execute("SELECT name FROM permission")
        rows = await cur.fetchall()
        return frozenset(r[0] for r in rows)

    async def ensure(self, permissions: Iterable[Permission]) -> int:
        """Insert missing permissions. Returns how many rows were added."""
        inserted = 0
        for p in permissions:
            cur = await self._conn.execute(
                """
                INSERT INTO permission (id, name, module, action, description)
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (name) DO NOTHING
                """,
                (uuid4(), p.name, p.module, p.action, p.label),
            )
            inserted += cur.rowcount
        return inserted
