"""Role and group membership of a user at evaluation time."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class PrincipalContext:
    """Snapshot of a user's roles and groups. Not persisted."""

    user_id: UUID
    role_ids: frozenset[UUID] = field(default_factory=frozenset)
    group_ids: frozenset[UUID] = field(default_factory=frozenset)
