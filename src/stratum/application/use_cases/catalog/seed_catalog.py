"""Seed catalog use case - bootstrap permissions and role grants."""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import uuid4

from stratum.application.dto.seed_dto import PermissionSeed, RoleGrantSeed
from stratum.application.ports import DecisionCache
from stratum.domain.entities import Assignment, Permission
from stratum.domain.value_objects import AssignmentLevel, PermissionScope

logger = logging.getLogger(__name__)

DEFAULT_PERMISSION_SEEDS: tuple[PermissionSeed, ...] = (
    PermissionSeed("User", "Read", "View user information", PermissionScope.MODEL),
    PermissionSeed("User", "Write", "Modify user information", PermissionScope.MODEL),
    PermissionSeed("User", "Delete", "Delete users", PermissionScope.MODEL),
    PermissionSeed("Admin", "Access", "Access admin panel", PermissionScope.GLOBAL),
    PermissionSeed("Document", "Read", "View documents", PermissionScope.OBJECT),
    PermissionSeed("Document", "Write", "Edit documents", PermissionScope.OBJECT),
)


class SeedCatalogUseCase:
    """Create missing permissions and upsert role grants. Safe to run on every start."""

    def __init__(
        self,
        unit_of_work_factory: type,
        decision_cache: DecisionCache | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._decision_cache = decision_cache

    async def execute(
        self,
        permissions: Sequence[PermissionSeed] = DEFAULT_PERMISSION_SEEDS,
        role_grants: Sequence[RoleGrantSeed] = (),
    ) -> int:
        """Return the number of permissions that did not exist before."""
        now = datetime.now(UTC)
        created_count = 0
        async with self._uow_factory() as uow:
            by_name: dict[tuple[str, str], Permission] = {}
            for seed in permissions:
                permission, created = await uow.permissions.get_or_create(
                    Permission(
                        id=uuid4(),
                        resource=seed.resource,
                        action=seed.action,
                        scope=seed.scope,
                        default_priority=seed.default_priority,
                        description=seed.description,
                        created_at=now,
                        updated_at=now,
                    )
                )
                by_name[(seed.resource, seed.action)] = permission
                created_count += created

            for grant in role_grants:
                permission = by_name.get((grant.resource, grant.action))
                if permission is None:
                    permission, created = await uow.permissions.get_or_create(
                        Permission(
                            id=uuid4(),
                            resource=grant.resource,
                            action=grant.action,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                    by_name[(grant.resource, grant.action)] = permission
                    created_count += created
                await uow.assignments.upsert(
                    Assignment(
                        id=uuid4(),
                        level=AssignmentLevel.ROLE,
                        subject_id=grant.role_id,
                        permission_id=permission.id,
                        is_granted=grant.is_granted,
                        priority=(
                            grant.priority
                            if grant.priority is not None
                            else AssignmentLevel.ROLE.default_priority
                        ),
                        created_at=now,
                        updated_at=now,
                    )
                )

        if role_grants and self._decision_cache is not None:
            self._decision_cache.clear()
        logger.info(
            "Catalog seeded: %d permissions created, %d role grants applied",
            created_count,
            len(role_grants),
        )
        return created_count
