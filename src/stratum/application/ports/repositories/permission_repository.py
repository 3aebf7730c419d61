"""Permission catalog repository port."""

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from stratum.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission catalog persistence."""

    async def get_by_id(self, permission_id: UUID) -> Permission | None: ...

    async def find(self, resource: str, action: str) -> Permission | None: ...

    async def get_or_create(self, permission: Permission) -> tuple[Permission, bool]: ...

    async def list_by_ids(self, permission_ids: Iterable[UUID]) -> list[Permission]: ...

    async def list_active(self) -> list[Permission]: ...

    async def set_active(self, permission_id: UUID, active: bool) -> bool: ...
