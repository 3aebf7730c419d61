"""Principal resolver port - role and group membership from identity storage."""

from typing import Protocol
from uuid import UUID


class PrincipalResolver(Protocol):
    """Port for reading a user's current roles and groups. Implemented by the host."""

    async def roles_of(self, user_id: UUID) -> set[UUID]: ...

    async def groups_of(self, user_id: UUID) -> set[UUID]: ...
