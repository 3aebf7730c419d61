"""Domain value objects."""

from stratum.domain.value_objects.assignment_context import AssignmentContext
from stratum.domain.value_objects.assignment_level import (
    DEFAULT_PRIORITIES,
    AssignmentLevel,
)
from stratum.domain.value_objects.permission_name import PermissionName
from stratum.domain.value_objects.permission_scope import PermissionScope
from stratum.domain.value_objects.principal_context import PrincipalContext

__all__ = [
    "DEFAULT_PRIORITIES",
    "AssignmentContext",
    "AssignmentLevel",
    "PermissionName",
    "PermissionScope",
    "PrincipalContext",
]
