"""PostgreSQL assignment repository implementation.

All five levels share the permission_assignment table; the level column
tags each row and context_key completes the uniqueness tuple.
"""

from collections.abc import Collection
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.errors import ForeignKeyViolation

from stratum.domain.entities import Assignment
from stratum.domain.exceptions import NotFound
from stratum.domain.value_objects import AssignmentContext, AssignmentLevel

_COLUMNS = (
    "a.id, a.level, a.subject_id, a.permission_id, a.is_granted, a.priority, "
    "a.expires_at, a.model_type, a.object_type, a.object_id, "
    "a.created_at, a.updated_at, a.created_by, a.updated_by"
)


def _row_to_assignment(r: tuple) -> Assignment:
    return Assignment(
        id=r[0],
        level=AssignmentLevel(r[1]),
        subject_id=r[2],
        permission_id=r[3],
        is_granted=r[4],
        priority=r[5],
        context=AssignmentContext(
            expires_at=r[6],
            model_type=r[7],
            object_type=r[8],
            object_id=r[9],
        ),
        created_at=r[10],
        updated_at=r[11],
        created_by=r[12],
        updated_by=r[13],
    )


def _build_context_conditions(
    level: AssignmentLevel, context: AssignmentContext | None
) -> tuple[list[str], list[object]] | None:
    """Extra WHERE conditions for model/object rows.

    Returns None when the level needs context the caller did not supply, in
    which case nothing can match.
    """
    if level is AssignmentLevel.MODEL:
        if context is None or not context.model_type:
            return None
        return ["a.model_type = %s"], [context.model_type]
    if level is AssignmentLevel.OBJECT:
        if context is None or not context.object_type or context.object_id is None:
            return None
        return ["a.object_type = %s", "a.object_id = %s"], [
            context.object_type,
            context.object_id,
        ]
    return [], []


class PostgresAssignmentRepository:
    """Assignment repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def upsert(self, assignment: Assignment) -> Assignment:
        """Insert or fully replace the row for (level, subject, permission, context)."""
        ctx = assignment.context
        try:
            cur = await self._conn.execute(
                "INSERT INTO permission_assignment AS a (id, level, subject_id, permission_id, "
                "is_granted, priority, expires_at, model_type, object_type, object_id, "
                "context_key, created_at, updated_at, created_by, updated_by) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s) "
                "ON CONFLICT (level, subject_id, permission_id, context_key) DO UPDATE SET "
                "is_granted = EXCLUDED.is_granted, priority = EXCLUDED.priority, "
                "expires_at = EXCLUDED.expires_at, updated_at = EXCLUDED.updated_at, "
                "updated_by = EXCLUDED.updated_by "
                f"RETURNING {_COLUMNS}",
                (
                    assignment.id,
                    assignment.level.value,
                    assignment.subject_id,
                    assignment.permission_id,
                    assignment.is_granted,
                    assignment.priority,
                    ctx.expires_at,
                    ctx.model_type,
                    ctx.object_type,
                    ctx.object_id,
                    assignment.context_key,
                    assignment.created_at,
                    assignment.updated_at,
                    assignment.created_by,
                    assignment.updated_by,
                ),
            )
        except ForeignKeyViolation as e:
            raise NotFound("Permission", str(assignment.permission_id)) from e
        r = await cur.fetchone()
        return _row_to_assignment(r)

    async def remove(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        permission_id: UUID,
        context_key: str = "",
    ) -> bool:
        """Delete the row. Returns False if it did not exist."""
        cur = await self._conn.execute(
            "DELETE FROM permission_assignment "
            "WHERE level = %s AND subject_id = %s AND permission_id = %s AND context_key = %s",
            (level.value, subject_id, permission_id, context_key),
        )
        return cur.rowcount > 0

    async def find_matching(
        self,
        level: AssignmentLevel,
        subject_ids: Collection[UUID],
        resource: str,
        action: str,
        context: AssignmentContext | None = None,
    ) -> list[Assignment]:
        """Rows for any of the subjects whose active permission is resource.action."""
        if not subject_ids:
            return []
        extra = _build_context_conditions(level, context)
        if extra is None:
            return []
        conditions, extra_params = extra

        where = " AND ".join(
            [
                "a.level = %s",
                "a.subject_id = ANY(%s)",
                "p.resource = %s",
                "p.action = %s",
                "p.is_active",
                *conditions,
            ]
        )
        params = (level.value, list(subject_ids), resource, action, *extra_params)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_assignment a "
            f"JOIN permission p ON p.id = a.permission_id WHERE {where} "
            "ORDER BY a.priority",
            params,
        )
        rows = await cur.fetchall()
        return [_row_to_assignment(r) for r in rows]

    async def list_by_subjects(
        self, level: AssignmentLevel, subject_ids: Collection[UUID]
    ) -> list[Assignment]:
        """All rows at a level for the given subjects."""
        if not subject_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_assignment a "
            "WHERE a.level = %s AND a.subject_id = ANY(%s) ORDER BY a.priority",
            (level.value, list(subject_ids)),
        )
        rows = await cur.fetchall()
        return [_row_to_assignment(r) for r in rows]
