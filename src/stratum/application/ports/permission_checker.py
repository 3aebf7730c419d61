"""Permission checker port - single authorization decision."""

from typing import Protocol
from uuid import UUID

from stratum.application.dto.permission_query import PermissionQuery


class PermissionChecker(Protocol):
    """Port for checking whether a user may perform a query."""

    async def check(self, user_id: UUID, query: PermissionQuery) -> bool: ...
