"""Permission entity - catalog entry for a resource/action pair."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from stratum.domain.value_objects import PermissionScope


@dataclass
class Permission:
    """Permission - action on a resource, unique by (resource, action)."""

    id: UUID
    resource: str
    action: str
    created_at: datetime
    updated_at: datetime
    scope: PermissionScope = PermissionScope.GLOBAL
    default_priority: int = 0
    description: str | None = None
    is_active: bool = True

    @property
    def name(self) -> str:
        """Permission name in Resource.Action form."""
        return f"{self.resource}.{self.action}"

    def matches(self, permission_name: str) -> bool:
        return self.name.casefold() == permission_name.casefold()
