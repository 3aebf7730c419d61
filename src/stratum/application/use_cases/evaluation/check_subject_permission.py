"""Check whether a role or group itself holds a permission."""

from uuid import UUID

from stratum.domain.exceptions import InvalidArgument
from stratum.domain.policy import resolve_decision
from stratum.domain.value_objects import AssignmentLevel


class CheckSubjectPermissionUseCase:
    """Answer for a single role or group, without resolving any user."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        resource: str,
        action: str,
    ) -> bool:
        if level not in (AssignmentLevel.ROLE, AssignmentLevel.GROUP):
            raise InvalidArgument(f"Subject checks are for roles and groups, not {level}")

        async with self._uow_factory() as uow:
            rows = await uow.assignments.find_matching(level, {subject_id}, resource, action)
        return resolve_decision(rows)
