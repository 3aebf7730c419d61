"""Check permission use case - the five-level evaluation."""

import asyncio
import logging
from datetime import UTC, datetime
from uuid import UUID

from stratum.application.dto.permission_query import PermissionQuery
from stratum.application.ports import PrincipalResolver, UnitOfWork
from stratum.domain.entities import Assignment
from stratum.domain.policy import resolve_decision
from stratum.domain.value_objects import AssignmentLevel, PrincipalContext

logger = logging.getLogger(__name__)


async def resolve_principal(resolver: PrincipalResolver, user_id: UUID) -> PrincipalContext:
    """Ask identity storage for the user's roles and groups."""
    role_ids, group_ids = await asyncio.gather(
        resolver.roles_of(user_id),
        resolver.groups_of(user_id),
    )
    return PrincipalContext(
        user_id=user_id,
        role_ids=frozenset(role_ids or ()),
        group_ids=frozenset(group_ids or ()),
    )


async def collect_candidates(
    uow: UnitOfWork,
    principal: PrincipalContext,
    query: PermissionQuery,
    now: datetime,
) -> list[Assignment]:
    """Gather every assignment that applies to the query, across all levels."""
    repo = uow.assignments
    user_ids = {principal.user_id}

    candidates = await repo.find_matching(
        AssignmentLevel.ROLE, principal.role_ids, query.resource, query.action
    )
    candidates += await repo.find_matching(
        AssignmentLevel.GROUP, principal.group_ids, query.resource, query.action
    )
    user_rows = await repo.find_matching(
        AssignmentLevel.USER, user_ids, query.resource, query.action
    )
    candidates += [a for a in user_rows if not a.is_expired(now)]

    if query.includes_model:
        candidates += await repo.find_matching(
            AssignmentLevel.MODEL,
            user_ids,
            query.resource,
            query.action,
            query.model_context(),
        )
    if query.includes_object:
        candidates += await repo.find_matching(
            AssignmentLevel.OBJECT,
            user_ids,
            query.resource,
            query.action,
            query.object_context(),
        )
    return candidates


class CheckPermissionUseCase:
    """Decide whether a user may perform an action on a resource."""

    def __init__(
        self,
        unit_of_work_factory: type,
        principal_resolver: PrincipalResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._principal_resolver = principal_resolver

    async def execute(self, user_id: UUID, query: PermissionQuery) -> bool:
        """Default deny; any explicit deny overrides every grant."""
        principal = await resolve_principal(self._principal_resolver, user_id)
        return await self.evaluate(principal, query)

    async def evaluate(self, principal: PrincipalContext, query: PermissionQuery) -> bool:
        """Evaluate for an already resolved principal."""
        async with self._uow_factory() as uow:
            candidates = await collect_candidates(uow, principal, query, datetime.now(UTC))

        allowed = resolve_decision(candidates)
        logger.debug(
            "Permission check - user=%s %s.%s model=%s object=%s:%s candidates=%d result=%s",
            principal.user_id,
            query.resource,
            query.action,
            query.model_type,
            query.object_type,
            query.object_id,
            len(candidates),
            allowed,
        )
        return allowed
