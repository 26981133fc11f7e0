"""PostgreSQL role repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from permatrix.domain.entities import Role

_ROLE_COLUMNS = (
    "r.id, r.name, r.label, r.description, "
    "COALESCE(array_agg(p.name) FILTER (WHERE p.name IS NOT NULL), '{}')"
)
_ROLE_JOIN = (
    "FROM role r "
    "LEFT JOIN role_permission rp ON rp.role_id = r.id "
    "LEFT JOIN permission p ON p.id = rp.permission_id"
)


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        label=r[2],
        description=r[3] or "",
        permissions=frozenset(r[4]),
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} {_ROLE_JOIN} WHERE r.id = %s GROUP BY r.id",
            (role_id,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} {_ROLE_JOIN} WHERE r.name = %s GROUP BY r.id",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} {_ROLE_JOIN} GROUP BY r.id ORDER BY r.name"
        )
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def list_for_user(self, user_id: UUID) -> list[Role]:
        """List roles assigned to user, holding share locks on the role rows."""
        await self._conn.execute(
            "SELECT r.id FROM role r JOIN user_role ur ON ur.role_id = r.id "
            "WHERE ur.user_id = %s FOR SHARE OF r",
            (user_id,),
        )
        cur = await self._conn.execute(
            f"SELECT {_ROLE_COLUMNS} {_ROLE_JOIN} "
            "JOIN user_role ur ON ur.role_id = r.id "
            "WHERE ur.user_id = %s GROUP BY r.id ORDER BY r.name",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def count_users(self, role_id: UUID) -> int:
        """Count users holding role."""
        cur = await self._conn.execute(
            "SELECT count(*) FROM user_role WHERE role_id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return r[0]

    async def create(self, role: Role) -> Role:
        """Create role with its permissions."""
        await self._conn.execute(
            "INSERT INTO role (id, name, label, description) VALUES (%s, %s, %s, %s)",
            (role.id, role.name, role.label, role.description),
        )
        await self._insert_permissions(role.id, role.permissions)
        return role

    async def set_permissions(self, role_id: UUID, names: frozenset[str]) -> None:
        """Replace role permissions; locks the role row against concurrent saves."""
        await self._conn.execute(
            "SELECT id FROM role WHERE id = %s FOR UPDATE",
            (role_id,),
        )
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        await self._insert_permissions(role_id, names)

    async def delete(self, role_id: UUID) -> None:
        """Delete role."""
        await self._conn.execute(
            "DELETE FROM role WHERE id = %s",
            (role_id,),
        )

    async def assign_to_user(self, user_id: UUID, role_ids: list[UUID]) -> None:
        """Replace user's roles."""
        await self._conn.execute(
            "DELETE FROM user_role WHERE user_id = %s",
            (user_id,),
        )
        for role_id in role_ids:
            await self._conn.execute(
                "INSERT INTO user_role (user_id, role_id) VALUES (%s, %s)",
                (user_id, role_id),
            )

    async def _insert_permissions(self, role_id: UUID, names: frozenset[str]) -> None:
        if not names:
            return
        await self._conn.execute(
            "INSERT INTO role_permission (role_id, permission_id) "
            "SELECT %s, id FROM permission WHERE name = ANY(%s)",
            (role_id, sorted(names)),
        )
