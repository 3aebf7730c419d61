"""Permission query DTO."""

from dataclasses import dataclass
from uuid import UUID

from stratum.domain.value_objects import AssignmentContext


@dataclass(frozen=True)
class PermissionQuery:
    """What is being asked: an action on a resource, optionally narrowed."""

    resource: str
    action: str
    model_type: str | None = None
    object_id: UUID | None = None
    object_type: str | None = None

    @property
    def includes_model(self) -> bool:
        return bool(self.model_type)

    @property
    def includes_object(self) -> bool:
        # both halves are needed; a lone id or type never matches object rows
        return self.object_id is not None and bool(self.object_type)

    def model_context(self) -> AssignmentContext:
        return AssignmentContext(model_type=self.model_type)

    def object_context(self) -> AssignmentContext:
        return AssignmentContext(object_type=self.object_type, object_id=self.object_id)

    def cache_key(self, user_id: UUID) -> tuple:
        return (user_id, self.resource, self.action, self.model_type, self.object_id, self.object_type)
