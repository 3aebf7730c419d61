"""Assignment repository port - one store for all five levels."""

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from stratum.domain.entities import Assignment
from stratum.domain.value_objects import AssignmentContext, AssignmentLevel


class AssignmentRepository(Protocol):
    """Port for assignment persistence."""

    async def upsert(self, assignment: Assignment) -> Assignment: ...

    async def remove(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        permission_id: UUID,
        context_key: str = "",
    ) -> bool: ...

    async def find_matching(
        self,
        level: AssignmentLevel,
        subject_ids: Collection[UUID],
        resource: str,
        action: str,
        context: AssignmentContext | None = None,
    ) -> list[Assignment]: ...

    async def list_by_subjects(
        self, level: AssignmentLevel, subject_ids: Collection[UUID]
    ) -> list[Assignment]: ...
