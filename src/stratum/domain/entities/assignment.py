"""Assignment entity - grant or deny of a permission at one hierarchy level."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from stratum.domain.value_objects import AssignmentContext, AssignmentLevel


@dataclass
class Assignment:
    """Binds a role, group or user (subject) to a permission at a level.

    One row per (level, subject_id, permission_id, context key). Model and
    object rows always belong to a user; the context tells which model type
    or object instance they cover.
    """

    id: UUID
    level: AssignmentLevel
    subject_id: UUID
    permission_id: UUID
    is_granted: bool
    priority: int
    created_at: datetime
    updated_at: datetime
    context: AssignmentContext = field(default_factory=AssignmentContext)
    created_by: UUID | None = None
    updated_by: UUID | None = None

    @property
    def context_key(self) -> str:
        return self.context.key(self.level)

    @property
    def expires_at(self) -> datetime | None:
        return self.context.expires_at

    def is_expired(self, now: datetime) -> bool:
        """True if the row carries an expiry that is not in the future."""
        return self.context.expires_at is not None and self.context.expires_at <= now
