"""Permission checker implementation - evaluation with an optional decision cache."""

from uuid import UUID

from stratum.application.dto.permission_query import PermissionQuery
from stratum.application.ports import DecisionCache
from stratum.application.use_cases.evaluation.check_permission import (
    CheckPermissionUseCase,
)


class StratumPermissionChecker:
    """Checks user permissions, memoising results when a cache is configured."""

    def __init__(
        self,
        check_permission: CheckPermissionUseCase,
        decision_cache: DecisionCache | None = None,
    ) -> None:
        self._check_permission = check_permission
        self._decision_cache = decision_cache

    async def check(self, user_id: UUID, query: PermissionQuery) -> bool:
        """Check if user may perform the query."""
        if self._decision_cache is None:
            return await self._check_permission.execute(user_id, query)

        key = query.cache_key(user_id)
        cached = self._decision_cache.get(key)
        if cached is not None:
            return cached

        allowed = await self._check_permission.execute(user_id, query)
        self._decision_cache.set(key, allowed)
        return allowed
