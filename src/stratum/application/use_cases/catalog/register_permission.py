"""Register permission use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from stratum.domain.entities import Permission
from stratum.domain.exceptions import InvalidArgument
from stratum.domain.value_objects import PermissionScope

logger = logging.getLogger(__name__)


class RegisterPermissionUseCase:
    """Get or create a catalog permission by (resource, action)."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        resource: str,
        action: str,
        scope: PermissionScope = PermissionScope.GLOBAL,
        default_priority: int = 0,
        description: str | None = None,
    ) -> Permission:
        """Idempotent: an existing permission is returned unchanged."""
        if not resource or not action:
            raise InvalidArgument("Permission needs both resource and action")

        now = datetime.now(UTC)
        async with self._uow_factory() as uow:
            permission, created = await uow.permissions.get_or_create(
                Permission(
                    id=uuid4(),
                    resource=resource,
                    action=action,
                    scope=scope,
                    default_priority=default_priority,
                    description=description,
                    created_at=now,
                    updated_at=now,
                )
            )

        if created:
            logger.info("Permission created: %s - Scope: %s", permission.name, scope)
        return permission
