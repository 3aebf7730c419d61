"""Permission service - the library's inbound API."""

from collections.abc import Iterable, Sequence
from datetime import datetime
from uuid import UUID

from stratum.application.dto.permission_query import PermissionQuery
from stratum.application.dto.seed_dto import PermissionSeed, RoleGrantSeed
from stratum.application.ports import PermissionChecker
from stratum.application.use_cases.assignment.grant_permission import (
    GrantPermissionUseCase,
)
from stratum.application.use_cases.assignment.revoke_permission import (
    RevokePermissionUseCase,
)
from stratum.application.use_cases.catalog.deactivate_permission import (
    DeactivatePermissionUseCase,
)
from stratum.application.use_cases.catalog.register_permission import (
    RegisterPermissionUseCase,
)
from stratum.application.use_cases.catalog.seed_catalog import (
    DEFAULT_PERMISSION_SEEDS,
    SeedCatalogUseCase,
)
from stratum.application.use_cases.evaluation.check_permissions import (
    CheckPermissionsUseCase,
)
from stratum.application.use_cases.evaluation.check_subject_permission import (
    CheckSubjectPermissionUseCase,
)
from stratum.application.use_cases.evaluation.effective_permissions import (
    EffectivePermissionsUseCase,
)
from stratum.domain.entities import Assignment, Permission
from stratum.domain.exceptions import PermissionDenied
from stratum.domain.value_objects import (
    AssignmentContext,
    AssignmentLevel,
    PermissionScope,
)


class PermissionService:
    """Evaluation, assignment and catalog operations behind one object.

    Store failures are raised as StoreUnavailable and never turned into a
    decision; callers choose whether to fail closed.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        check_permissions: CheckPermissionsUseCase,
        effective_permissions: EffectivePermissionsUseCase,
        check_subject_permission: CheckSubjectPermissionUseCase,
        grant_permission: GrantPermissionUseCase,
        revoke_permission: RevokePermissionUseCase,
        register_permission: RegisterPermissionUseCase,
        deactivate_permission: DeactivatePermissionUseCase,
        seed_catalog: SeedCatalogUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._check_permissions = check_permissions
        self._effective_permissions = effective_permissions
        self._check_subject_permission = check_subject_permission
        self._grant_permission = grant_permission
        self._revoke_permission = revoke_permission
        self._register_permission = register_permission
        self._deactivate_permission = deactivate_permission
        self._seed_catalog = seed_catalog

    # Evaluation

    async def has_permission(
        self,
        user_id: UUID,
        resource: str,
        action: str,
        model_type: str | None = None,
        object_id: UUID | None = None,
        object_type: str | None = None,
    ) -> bool:
        query = PermissionQuery(
            resource=resource,
            action=action,
            model_type=model_type,
            object_id=object_id,
            object_type=object_type,
        )
        return await self._permission_checker.check(user_id, query)

    async def can_read(
        self,
        user_id: UUID,
        resource: str,
        model_type: str | None = None,
        object_id: UUID | None = None,
        object_type: str | None = None,
    ) -> bool:
        return await self.has_permission(user_id, resource, "Read", model_type, object_id, object_type)

    async def can_write(
        self,
        user_id: UUID,
        resource: str,
        model_type: str | None = None,
        object_id: UUID | None = None,
        object_type: str | None = None,
    ) -> bool:
        return await self.has_permission(user_id, resource, "Write", model_type, object_id, object_type)

    async def can_delete(
        self,
        user_id: UUID,
        resource: str,
        model_type: str | None = None,
        object_id: UUID | None = None,
        object_type: str | None = None,
    ) -> bool:
        return await self.has_permission(user_id, resource, "Delete", model_type, object_id, object_type)

    async def require_permission(
        self,
        user_id: UUID,
        resource: str,
        action: str,
        model_type: str | None = None,
        object_id: UUID | None = None,
        object_type: str | None = None,
    ) -> None:
        """Like has_permission, but raises PermissionDenied instead of returning False."""
        if not await self.has_permission(user_id, resource, action, model_type, object_id, object_type):
            raise PermissionDenied(f"User {user_id} may not {action} {resource}")

    async def has_permissions(self, user_id: UUID, permission_names: Iterable[str]) -> dict[str, bool]:
        return await self._check_permissions.execute(user_id, permission_names)

    async def effective_permissions(self, user_id: UUID) -> list[Permission]:
        return await self._effective_permissions.execute(user_id)

    async def effective_permission_names(self, user_id: UUID) -> list[str]:
        return await self._effective_permissions.names(user_id)

    async def role_has_permission(self, role_id: UUID, resource: str, action: str) -> bool:
        return await self._check_subject_permission.execute(
            AssignmentLevel.ROLE, role_id, resource, action
        )

    async def group_has_permission(self, group_id: UUID, resource: str, action: str) -> bool:
        return await self._check_subject_permission.execute(
            AssignmentLevel.GROUP, group_id, resource, action
        )

    # Assignments

    async def grant(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        resource: str,
        action: str,
        is_granted: bool = True,
        *,
        priority: int | None = None,
        expires_at: datetime | None = None,
        model_type: str | None = None,
        object_type: str | None = None,
        object_id: UUID | None = None,
        actor_id: UUID | None = None,
    ) -> Assignment:
        """Upsert a grant (or, with is_granted=False, an explicit deny)."""
        context = AssignmentContext(
            expires_at=expires_at,
            model_type=model_type,
            object_type=object_type,
            object_id=object_id,
        )
        return await self._grant_permission.execute(
            level,
            subject_id,
            resource,
            action,
            is_granted,
            priority=priority,
            context=context,
            actor_id=actor_id,
        )

    async def deny(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        resource: str,
        action: str,
        *,
        priority: int | None = None,
        expires_at: datetime | None = None,
        model_type: str | None = None,
        object_type: str | None = None,
        object_id: UUID | None = None,
        actor_id: UUID | None = None,
    ) -> Assignment:
        """Upsert an explicit deny."""
        return await self.grant(
            level,
            subject_id,
            resource,
            action,
            False,
            priority=priority,
            expires_at=expires_at,
            model_type=model_type,
            object_type=object_type,
            object_id=object_id,
            actor_id=actor_id,
        )

    async def revoke(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        resource: str,
        action: str,
        *,
        model_type: str | None = None,
        object_type: str | None = None,
        object_id: UUID | None = None,
    ) -> bool:
        context = AssignmentContext(
            model_type=model_type,
            object_type=object_type,
            object_id=object_id,
        )
        return await self._revoke_permission.execute(
            level, subject_id, resource, action, context=context
        )

    # Catalog

    async def register_permission(
        self,
        resource: str,
        action: str,
        scope: PermissionScope = PermissionScope.GLOBAL,
        default_priority: int = 0,
        description: str | None = None,
    ) -> Permission:
        return await self._register_permission.execute(
            resource, action, scope, default_priority, description
        )

    async def find_permission(self, resource: str, action: str) -> Permission | None:
        async with self._uow_factory() as uow:
            return await uow.permissions.find(resource, action)

    async def list_permissions(self) -> list[Permission]:
        """Active permissions ordered by resource and action."""
        async with self._uow_factory() as uow:
            return await uow.permissions.list_active()

    async def deactivate_permission(self, permission_id: UUID) -> None:
        await self._deactivate_permission.execute(permission_id, active=False)

    async def reactivate_permission(self, permission_id: UUID) -> None:
        await self._deactivate_permission.execute(permission_id, active=True)

    async def seed(
        self,
        permissions: Sequence[PermissionSeed] = DEFAULT_PERMISSION_SEEDS,
        role_grants: Sequence[RoleGrantSeed] = (),
    ) -> int:
        return await self._seed_catalog.execute(permissions, role_grants)
