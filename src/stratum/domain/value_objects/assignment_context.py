"""Level-specific context carried by an assignment."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from stratum.domain.exceptions import InvalidArgument
from stratum.domain.value_objects.assignment_level import AssignmentLevel


@dataclass(frozen=True)
class AssignmentContext:
    """Expiry for user rows, model type for model rows, object ref for object rows."""

    expires_at: datetime | None = None
    model_type: str | None = None
    object_type: str | None = None
    object_id: UUID | None = None

    def validate_for(self, level: AssignmentLevel) -> None:
        """Raise InvalidArgument when fields do not fit the level."""
        if self.expires_at is not None and level is not AssignmentLevel.USER:
            raise InvalidArgument(f"expires_at is only allowed on user assignments, not {level}")
        if self.expires_at is not None and self.expires_at.tzinfo is None:
            raise InvalidArgument("expires_at must be timezone-aware")

        if level is AssignmentLevel.MODEL:
            if not self.model_type:
                raise InvalidArgument("Model assignments require model_type")
        elif self.model_type is not None:
            raise InvalidArgument(f"model_type is not allowed on {level} assignments")

        if level is AssignmentLevel.OBJECT:
            if not self.object_type or self.object_id is None:
                raise InvalidArgument("Object assignments require object_type and object_id")
        elif self.object_type is not None or self.object_id is not None:
            raise InvalidArgument(f"object_type/object_id are not allowed on {level} assignments")

    def key(self, level: AssignmentLevel) -> str:
        """Context part of the (level, subject, permission, context) uniqueness tuple."""
        if level is AssignmentLevel.MODEL:
            return self.model_type or ""
        if level is AssignmentLevel.OBJECT:
            return f"{self.object_type}:{self.object_id}"
        return ""
