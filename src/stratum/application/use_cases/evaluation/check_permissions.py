"""Batch permission check use case."""

from collections.abc import Iterable
from datetime import UTC, datetime
from uuid import UUID

from stratum.application.dto.permission_query import PermissionQuery
from stratum.application.ports import PrincipalResolver
from stratum.application.use_cases.evaluation.check_permission import (
    collect_candidates,
    resolve_principal,
)
from stratum.domain.policy import resolve_decision
from stratum.domain.value_objects import PermissionName


class CheckPermissionsUseCase:
    """Check several "Resource.Action" names for one user."""

    def __init__(
        self,
        unit_of_work_factory: type,
        principal_resolver: PrincipalResolver,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._principal_resolver = principal_resolver

    async def execute(self, user_id: UUID, permission_names: Iterable[str]) -> dict[str, bool]:
        """Evaluate each name independently.

        Roles and groups are resolved once for the whole batch. Malformed
        names raise InvalidArgument before anything is read.
        """
        parsed = {name: PermissionName.parse(name) for name in permission_names}
        if not parsed:
            return {}

        principal = await resolve_principal(self._principal_resolver, user_id)
        now = datetime.now(UTC)
        results: dict[str, bool] = {}
        async with self._uow_factory() as uow:
            for name, permission_name in parsed.items():
                query = PermissionQuery(
                    resource=permission_name.resource,
                    action=permission_name.action,
                )
                candidates = await collect_candidates(uow, principal, query, now)
                results[name] = resolve_decision(candidates)
        return results
