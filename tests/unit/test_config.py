"""Unit tests for settings, permission declarations and startup seeding."""

import logging

import pytest

from stratum.config import Settings
from stratum.declarations import collect_permission_seeds, permission
from stratum.domain.value_objects import PermissionScope
from stratum.logging_config import setup_logging
from stratum.main import seed_declared_permissions


@permission("Read", "View appointments")
@permission("Cancel", "Cancel appointments", scope=PermissionScope.OBJECT, priority=10)
class Appointment:
    pass


@permission("Read")
class Invoice:
    pass


class Untagged:
    pass


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.decision_cache_ttl_seconds == 0
    assert settings.environment == "development"
    assert settings.permission_generation_enabled() is True


@pytest.mark.parametrize(
    ("environment", "flag", "expected"),
    [
        ("development", None, True),
        ("staging", None, False),
        ("production", None, False),
        ("production", True, True),
        ("development", False, False),
    ],
)
def test_permission_generation_enabled(environment, flag, expected) -> None:
    settings = Settings(_env_file=None, environment=environment, generate_permissions=flag)

    assert settings.permission_generation_enabled() is expected


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("DECISION_CACHE_TTL_SECONDS", "15")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = Settings(_env_file=None)

    assert settings.decision_cache_ttl_seconds == 15
    assert settings.permission_generation_enabled() is False


def test_collect_permission_seeds_keeps_source_order() -> None:
    seeds = collect_permission_seeds(Appointment, Invoice, Untagged)

    assert [s.name for s in seeds] == ["Appointment.Read", "Appointment.Cancel", "Invoice.Read"]
    cancel = seeds[1]
    assert cancel.scope is PermissionScope.OBJECT
    assert cancel.default_priority == 10
    assert seeds[2].scope is PermissionScope.MODEL


def test_collect_permission_seeds_drops_duplicates() -> None:
    assert len(collect_permission_seeds(Invoice, Invoice)) == 1


def test_permission_decorator_requires_action() -> None:
    with pytest.raises(ValueError):
        permission("")


@pytest.mark.asyncio
async def test_seed_declared_permissions_in_development(service, settings) -> None:
    created = await seed_declared_permissions(service, [Appointment, Invoice], settings)

    assert created == 3
    cancel = await service.find_permission("Appointment", "Cancel")
    assert cancel.description == "Cancel appointments"


@pytest.mark.asyncio
async def test_seed_declared_permissions_disabled_in_production(service) -> None:
    settings = Settings(_env_file=None, environment="production")

    assert await seed_declared_permissions(service, [Appointment], settings) == 0
    assert await service.list_permissions() == []


def test_setup_logging_respects_existing_handlers() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        root.handlers = [logging.NullHandler()]
        setup_logging("DEBUG")
        assert isinstance(root.handlers[0], logging.NullHandler)

        setup_logging("DEBUG", force_configure=True)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
