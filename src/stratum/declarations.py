"""Declarative permissions on model classes.

    @permission("Read", "View appointments")
    @permission("Cancel", "Cancel appointments", scope=PermissionScope.OBJECT)
    class Appointment: ...

collect_permission_seeds(Appointment) then yields Appointment.Read and
Appointment.Cancel seeds for the catalog.
"""

from collections.abc import Callable

from stratum.application.dto.seed_dto import PermissionSeed
from stratum.domain.value_objects import PermissionScope

PERMISSIONS_ATTR = "__stratum_permissions__"


def permission(
    action: str,
    description: str | None = None,
    scope: PermissionScope = PermissionScope.MODEL,
    priority: int = 0,
) -> Callable[[type], type]:
    """Class decorator declaring one permission for the decorated model."""
    if not action:
        raise ValueError("action is required")

    def decorator(cls: type) -> type:
        declared = list(cls.__dict__.get(PERMISSIONS_ATTR, ()))
        # decorators apply bottom-up; prepend to keep source order
        declared.insert(0, (action, description, scope, priority))
        setattr(cls, PERMISSIONS_ATTR, tuple(declared))
        return cls

    return decorator


def collect_permission_seeds(*models: type) -> list[PermissionSeed]:
    """Turn decorated classes into catalog seeds. Duplicates are dropped."""
    seeds: list[PermissionSeed] = []
    seen: set[tuple[str, str]] = set()
    for model in models:
        for action, description, scope, priority in model.__dict__.get(PERMISSIONS_ATTR, ()):
            key = (model.__name__, action)
            if key in seen:
                continue
            seen.add(key)
            seeds.append(
                PermissionSeed(
                    resource=model.__name__,
                    action=action,
                    description=description,
                    scope=scope,
                    default_priority=priority,
                )
            )
    return seeds
