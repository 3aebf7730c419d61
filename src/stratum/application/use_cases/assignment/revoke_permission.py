"""Revoke permission use case."""

import logging
from uuid import UUID

from stratum.application.ports import DecisionCache
from stratum.application.use_cases.assignment.grant_permission import invalidate_for
from stratum.domain.value_objects import AssignmentContext, AssignmentLevel

logger = logging.getLogger(__name__)


class RevokePermissionUseCase:
    """Remove a subject's assignment for a permission at one level."""

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
        *,
        context: AssignmentContext | None = None,
    ) -> bool:
        """Delete the row. Returns False when the permission or row does not exist."""
        context = context or AssignmentContext()
        context.validate_for(level)

        async with self._uow_factory() as uow:
            permission = await uow.permissions.find(resource, action)
            if not permission:
                return False
            removed = await uow.assignments.remove(
                level, subject_id, permission.id, context.key(level)
            )

        if removed:
            invalidate_for(self._decision_cache, level, subject_id)
            logger.info(
                "%s permission revoked: subject=%s permission=%s",
                level.capitalize(),
                subject_id,
                permission.name,
            )
        return removed
