"""Application ports - interfaces for external adapters."""

from stratum.application.ports.decision_cache import DecisionCache
from stratum.application.ports.permission_checker import PermissionChecker
from stratum.application.ports.principal_resolver import PrincipalResolver
from stratum.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "DecisionCache",
    "PermissionChecker",
    "PrincipalResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
