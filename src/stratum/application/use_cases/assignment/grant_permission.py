"""Grant permission use case."""

import logging
from datetime import UTC, datetime
from uuid import UUID, uuid4

from stratum.application.ports import DecisionCache
from stratum.domain.entities import Assignment, Permission
from stratum.domain.value_objects import (
    AssignmentContext,
    AssignmentLevel,
    PermissionScope,
)

logger = logging.getLogger(__name__)

_LEVEL_SCOPES = {
    AssignmentLevel.MODEL: PermissionScope.MODEL,
    AssignmentLevel.OBJECT: PermissionScope.OBJECT,
}


def invalidate_for(cache: DecisionCache | None, level: AssignmentLevel, subject_id: UUID) -> None:
    """Drop cached decisions a change at this level can affect."""
    if cache is None:
        return
    if level.is_user_scoped:
        cache.invalidate_user(subject_id)
    else:
        # role and group members are not known here
        cache.clear()


class GrantPermissionUseCase:
    """Grant or deny a permission to a subject at one level (upsert)."""

    def __init__(
        self,
        unit_of_work_factory: type,
        decision_cache: DecisionCache | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._decision_cache = decision_cache

    async def execute(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        resource: str,
        action: str,
        is_granted: bool = True,
        *,
        priority: int | None = None,
        context: AssignmentContext | None = None,
        actor_id: UUID | None = None,
    ) -> Assignment:
        """Create the permission if needed, then replace any existing row for the tuple."""
        context = context or AssignmentContext()
        context.validate_for(level)
        if priority is None:
            priority = level.default_priority

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            permission, created = await uow.permissions.get_or_create(
                Permission(
                    id=uuid4(),
                    resource=resource,
                    action=action,
                    scope=_LEVEL_SCOPES.get(level, PermissionScope.GLOBAL),
                    created_at=now,
                    updated_at=now,
                )
            )
            if created:
                logger.info("Permission created: %s - Scope: %s", permission.name, permission.scope)
            elif not permission.is_active:
                logger.warning("Granting inactive permission %s; it is ignored until reactivated", permission.name)

            assignment = await uow.assignments.upsert(
                Assignment(
                    id=uuid4(),
                    level=level,
                    subject_id=subject_id,
                    permission_id=permission.id,
                    is_granted=is_granted,
                    priority=priority,
                    context=context,
                    created_at=now,
                    updated_at=now,
                    created_by=actor_id,
                    updated_by=actor_id,
                )
            )

        invalidate_for(self._decision_cache, level, subject_id)
        logger.info(
            "%s permission %s: subject=%s permission=%s granted=%s priority=%d",
            level.capitalize(),
            "updated" if assignment.created_at < assignment.updated_at else "granted",
            subject_id,
            permission.name,
            is_granted,
            priority,
        )
        return assignment
