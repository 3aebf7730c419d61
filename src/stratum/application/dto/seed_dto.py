"""Seed DTOs for bootstrapping the permission catalog."""

from dataclasses import dataclass
from uuid import UUID

from stratum.domain.value_objects import PermissionScope


@dataclass(frozen=True)
class PermissionSeed:
    """Catalog entry to create if absent."""

    resource: str
    action: str
    description: str | None = None
    scope: PermissionScope = PermissionScope.GLOBAL
    default_priority: int = 0

    @property
    def name(self) -> str:
        return f"{self.resource}.{self.action}"


@dataclass(frozen=True)
class RoleGrantSeed:
    """Role-level grant to upsert during bootstrap."""

    role_id: UUID
    resource: str
    action: str
    is_granted: bool = True
    priority: int | None = None
