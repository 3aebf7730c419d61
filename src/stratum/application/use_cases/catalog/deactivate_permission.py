"""Deactivate permission use case."""

import logging
from uuid import UUID

from stratum.application.ports import DecisionCache
from stratum.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class DeactivatePermissionUseCase:
    """Soft-(de)activate a catalog permission. Rows are never deleted."""

    def __init__(
        self,
        unit_of_work_factory: type,
        decision_cache: DecisionCache | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._decision_cache = decision_cache

    async def execute(self, permission_id: UUID, active: bool = False) -> None:
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(permission_id)
            if not permission:
                raise NotFound("Permission", str(permission_id))
            await uow.permissions.set_active(permission_id, active)

        if self._decision_cache is not None:
            self._decision_cache.clear()
        logger.info(
            "Permission %s: %s", "reactivated" if active else "deactivated", permission.name
        )
