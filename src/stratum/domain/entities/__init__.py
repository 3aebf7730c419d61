"""Domain entities."""

from stratum.domain.entities.assignment import Assignment
from stratum.domain.entities.permission import Permission

__all__ = [
    "Assignment",
    "Permission",
]
