"""Repository ports."""

from stratum.application.ports.repositories.assignment_repository import (
    AssignmentRepository,
)
from stratum.application.ports.repositories.permission_repository import (
    PermissionRepository,
)

__all__ = [
    "AssignmentRepository",
    "PermissionRepository",
]
