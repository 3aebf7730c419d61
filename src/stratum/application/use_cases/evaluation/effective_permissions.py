"""Effective permissions use case."""

from datetime import UTC, datetime
from uuid import UUID

from stratum.application.ports import PrincipalResolver
from stratum.application.use_cases.evaluation.check_permission import resolve_principal
from stratum.domain.entities import Permission
from stratum.domain.value_objects import AssignmentLevel


class EffectivePermissionsUseCase:
    """List the global permissions a user effectively holds.

    Grants come from the user's groups and direct user assignments. A
    permission is dropped when a role, group or user row denies it, and
    inactive permissions are never listed.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        principal_resolver: PrincipalResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._principal_resolver = principal_resolver

    async def execute(self, user_id: UUID) -> list[Permission]:
        principal = await resolve_principal(self._principal_resolver, user_id)
        now = datetime.now(UTC)

        async with self._uow_factory() as uow:
            repo = uow.assignments
            role_rows = await repo.list_by_subjects(AssignmentLevel.ROLE, principal.role_ids)
            group_rows = await repo.list_by_subjects(AssignmentLevel.GROUP, principal.group_ids)
            user_rows = [
                a
                for a in await repo.list_by_subjects(AssignmentLevel.USER, {user_id})
                if not a.is_expired(now)
            ]

            denied = {a.permission_id for a in role_rows + group_rows + user_rows if not a.is_granted}
            granted = {a.permission_id for a in group_rows + user_rows if a.is_granted}
            permissions = await uow.permissions.list_by_ids(granted - denied)

        active = [p for p in permissions if p.is_active]
        active.sort(key=lambda p: (p.resource, p.action))
        return active

    async def names(self, user_id: UUID) -> list[str]:
        """Effective permissions as Resource.Action strings."""
        return [p.name for p in await self.execute(user_id)]
