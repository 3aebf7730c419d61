"""Composition root - wire use cases, cache and persistence into a PermissionService."""

import logging
from collections.abc import Iterable

from psycopg_pool import AsyncConnectionPool

from stratum.application.permission_service import PermissionService
from stratum.application.ports import PrincipalResolver
from stratum.application.use_cases.assignment.grant_permission import (
    GrantPermissionUseCase,
)
from stratum.application.use_cases.assignment.revoke_permission import (
    RevokePermissionUseCase,
)
from stratum.application.use_cases.catalog.deactivate_permission import (
    DeactivatePermissionUseCase,
)
from stratum.application.use_cases.catalog.register_permission import (
    RegisterPermissionUseCase,
)
from stratum.application.use_cases.catalog.seed_catalog import SeedCatalogUseCase
from stratum.application.use_cases.evaluation.check_permission import (
    CheckPermissionUseCase,
)
from stratum.application.use_cases.evaluation.check_permissions import (
    CheckPermissionsUseCase,
)
from stratum.application.use_cases.evaluation.check_subject_permission import (
    CheckSubjectPermissionUseCase,
)
from stratum.application.use_cases.evaluation.effective_permissions import (
    EffectivePermissionsUseCase,
)
from stratum.config import Settings, get_settings
from stratum.declarations import collect_permission_seeds
from stratum.infrastructure.cache.decision_cache import TTLDecisionCache
from stratum.infrastructure.permission.permission_checker import (
    StratumPermissionChecker,
)
from stratum.infrastructure.persistence.postgres.connection import create_pool
from stratum.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)

logger = logging.getLogger(__name__)


def build_permission_service(
    uow_factory,
    principal_resolver: PrincipalResolver,
    settings: Settings | None = None,
) -> PermissionService:
    """Wire a PermissionService over any UnitOfWork factory."""
    settings = settings or get_settings()

    decision_cache = (
        TTLDecisionCache(
            maxsize=settings.decision_cache_maxsize,
            ttl=settings.decision_cache_ttl_seconds,
        )
        if settings.decision_cache_ttl_seconds > 0
        else None
    )

    check_permission = CheckPermissionUseCase(
        unit_of_work_factory=uow_factory,
        principal_resolver=principal_resolver,
    )
    permission_checker = StratumPermissionChecker(check_permission, decision_cache)

    return PermissionService(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
        check_permissions=CheckPermissionsUseCase(
            unit_of_work_factory=uow_factory,
            principal_resolver=principal_resolver,
        ),
        effective_permissions=EffectivePermissionsUseCase(
            unit_of_work_factory=uow_factory,
            principal_resolver=principal_resolver,
        ),
        check_subject_permission=CheckSubjectPermissionUseCase(uow_factory),
        grant_permission=GrantPermissionUseCase(uow_factory, decision_cache),
        revoke_permission=RevokePermissionUseCase(uow_factory, decision_cache),
        register_permission=RegisterPermissionUseCase(uow_factory),
        deactivate_permission=DeactivatePermissionUseCase(uow_factory, decision_cache),
        seed_catalog=SeedCatalogUseCase(uow_factory, decision_cache),
    )


def create_permission_service(
    principal_resolver: PrincipalResolver,
    settings: Settings | None = None,
) -> tuple[PermissionService, AsyncConnectionPool]:
    """Build a Postgres-backed PermissionService.

    The returned pool is closed; the host opens it on startup
    (await pool.open()) and closes it on shutdown.
    """
    settings = settings or get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout_seconds,
    )
    uow_factory = create_uow_factory(pool)
    return build_permission_service(uow_factory, principal_resolver, settings), pool


async def seed_declared_permissions(
    service: PermissionService,
    models: Iterable[type],
    settings: Settings | None = None,
) -> int:
    """Seed permissions declared with @permission, if enabled for this environment."""
    settings = settings or get_settings()
    if not settings.permission_generation_enabled():
        logger.info("Permission generation is disabled for environment: %s", settings.environment)
        return 0

    seeds = collect_permission_seeds(*models)
    logger.info("Found %d declared permissions", len(seeds))
    return await service.seed(seeds)
