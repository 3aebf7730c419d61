"""PostgreSQL permission catalog repository implementation."""

from collections.abc import Iterable
from uuid import UUID

from psycopg import AsyncConnection

from stratum.domain.entities import Permission
from stratum.domain.value_objects import PermissionScope

_COLUMNS = (
    "id, resource, action, scope, default_priority, description, is_active, "
    "created_at, updated_at"
)


def _row_to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        resource=r[1],
        action=r[2],
        scope=PermissionScope(r[3]),
        default_priority=r[4],
        description=r[5],
        is_active=r[6],
        created_at=r[7],
        updated_at=r[8],
    )


class PostgresPermissionRepository:
    """Permission catalog repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def find(self, resource: str, action: str) -> Permission | None:
        """Get permission by resource and action, active or not."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE resource = %s AND action = %s",
            (resource, action),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_or_create(self, permission: Permission) -> tuple[Permission, bool]:
        """Insert unless (resource, action) exists. Returns (permission, created)."""
        cur = await self._conn.execute(
            "INSERT INTO permission (id, resource, action, scope, default_priority, description, "
            "is_active, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s) "
            f"ON CONFLICT (resource, action) DO NOTHING RETURNING {_COLUMNS}",
            (
                permission.id,
                permission.resource,
                permission.action,
                permission.scope.value,
                permission.default_priority,
                permission.description,
                permission.is_active,
                permission.created_at,
                permission.updated_at,
            ),
        )
        r = await cur.fetchone()
        if r:
            return _row_to_permission(r), True
        existing = await self.find(permission.resource, permission.action)
        return existing, False

    async def list_by_ids(self, permission_ids: Iterable[UUID]) -> list[Permission]:
        """List permissions with the given ids."""
        ids = list(permission_ids)
        if not ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = ANY(%s)",
            (ids,),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def list_active(self) -> list[Permission]:
        """List active permissions ordered by resource and action."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE is_active ORDER BY resource, action"
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def set_active(self, permission_id: UUID, active: bool) -> bool:
        """Soft (de)activate a permission."""
        cur = await self._conn.execute(
            "UPDATE permission SET is_active = %s, updated_at = now() WHERE id = %s",
            (active, permission_id),
        )
        return cur.rowcount > 0
