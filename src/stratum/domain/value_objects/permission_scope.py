"""Permission scope for catalog entries."""

from enum import StrEnum


class PermissionScope(StrEnum):
    """Breadth a permission is usually checked at. Informational only."""

    GLOBAL = "global"
    MODEL = "model"
    OBJECT = "object"
