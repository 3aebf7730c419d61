"""Pytest fixtures for Stratum tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Collection, Iterable
from contextlib import asynccontextmanager
from dataclasses import replace
from uuid import UUID

import pytest

from stratum.application.permission_service import PermissionService
from stratum.config import Settings
from stratum.domain.entities import Assignment, Permission
from stratum.domain.exceptions import NotFound
from stratum.domain.value_objects import AssignmentContext, AssignmentLevel
from stratum.main import build_permission_service


# --- Fake repositories ---


class FakePermissionRepository:
    """In-memory permission catalog."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Permission] = {}
        self._by_key: dict[tuple[str, str], Permission] = {}

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        return self._by_id.get(permission_id)

    async def find(self, resource: str, action: str) -> Permission | None:
        return self._by_key.get((resource, action))

    async def get_or_create(self, permission: Permission) -> tuple[Permission, bool]:
        existing = self._by_key.get((permission.resource, permission.action))
        if existing:
            return existing, False
        self.add_permission(permission)
        return permission, True

    async def list_by_ids(self, permission_ids: Iterable[UUID]) -> list[Permission]:
        return [self._by_id[i] for i in permission_ids if i in self._by_id]

    async def list_active(self) -> list[Permission]:
        active = [p for p in self._by_id.values() if p.is_active]
        return sorted(active, key=lambda p: (p.resource, p.action))

    async def set_active(self, permission_id: UUID, active: bool) -> bool:
        permission = self._by_id.get(permission_id)
        if not permission:
            return False
        permission.is_active = active
        return True

    def add_permission(self, permission: Permission) -> None:
        """Helper to add permission for tests."""
        self._by_id[permission.id] = permission
        self._by_key[(permission.resource, permission.action)] = permission


class FakeAssignmentRepository:
    """In-memory assignment store keyed by (level, subject, permission, context)."""

    def __init__(self, permissions_repo: FakePermissionRepository) -> None:
        self._rows: dict[tuple[AssignmentLevel, UUID, UUID, str], Assignment] = {}
        self._permissions_repo = permissions_repo
        self.find_calls: list[AssignmentLevel] = []

    async def upsert(self, assignment: Assignment) -> Assignment:
        if assignment.permission_id not in self._permissions_repo._by_id:
            raise NotFound("Permission", str(assignment.permission_id))
        key = (
            assignment.level,
            assignment.subject_id,
            assignment.permission_id,
            assignment.context_key,
        )
        existing = self._rows.get(key)
        if existing:
            stored = replace(
                existing,
                is_granted=assignment.is_granted,
                priority=assignment.priority,
                context=replace(existing.context, expires_at=assignment.context.expires_at),
                updated_at=assignment.updated_at,
                updated_by=assignment.updated_by,
            )
        else:
            stored = assignment
        self._rows[key] = stored
        return stored

    async def remove(
        self,
        level: AssignmentLevel,
        subject_id: UUID,
        permission_id: UUID,
        context_key: str = "",
    ) -> bool:
        return self._rows.pop((level, subject_id, permission_id, context_key), None) is not None

    async def find_matching(
        self,
        level: AssignmentLevel,
        subject_ids: Collection[UUID],
        resource: str,
        action: str,
        context: AssignmentContext | None = None,
    ) -> list[Assignment]:
        self.find_calls.append(level)
        if level is AssignmentLevel.MODEL and (context is None or not context.model_type):
            return []
        if level is AssignmentLevel.OBJECT and (
            context is None or not context.object_type or context.object_id is None
        ):
            return []

        matches = []
        for a in self._rows.values():
            if a.level is not level or a.subject_id not in subject_ids:
                continue
            permission = self._permissions_repo._by_id[a.permission_id]
            if not permission.is_active:
                continue
            if permission.resource != resource or permission.action != action:
                continue
            if level is AssignmentLevel.MODEL and a.context.model_type != context.model_type:
                continue
            if level is AssignmentLevel.OBJECT and (
                a.context.object_type != context.object_type
                or a.context.object_id != context.object_id
            ):
                continue
            matches.append(a)
        return sorted(matches, key=lambda a: a.priority)

    async def list_by_subjects(
        self, level: AssignmentLevel, subject_ids: Collection[UUID]
    ) -> list[Assignment]:
        rows = [a for a in self._rows.values() if a.level is level and a.subject_id in subject_ids]
        return sorted(rows, key=lambda a: a.priority)

    def all(self) -> list[Assignment]:
        """Helper to inspect every stored row."""
        return list(self._rows.values())


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.assignments = FakeAssignmentRepository(permissions_repo=self.permissions)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


class FakePrincipalResolver:
    """In-memory role and group membership."""

    def __init__(self) -> None:
        self.roles: dict[UUID, set[UUID]] = {}
        self.groups: dict[UUID, set[UUID]] = {}
        self.calls = 0

    async def roles_of(self, user_id: UUID) -> set[UUID]:
        self.calls += 1
        return set(self.roles.get(user_id, set()))

    async def groups_of(self, user_id: UUID) -> set[UUID]:
        return set(self.groups.get(user_id, set()))

    def add_role(self, user_id: UUID, role_id: UUID) -> None:
        self.roles.setdefault(user_id, set()).add(role_id)

    def add_group(self, user_id: UUID, group_id: UUID) -> None:
        self.groups.setdefault(user_id, set()).add(group_id)


def make_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return factory


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return make_factory(fake_uow)


@pytest.fixture
def principal_resolver() -> FakePrincipalResolver:
    return FakePrincipalResolver()


@pytest.fixture
def settings() -> Settings:
    return Settings(decision_cache_ttl_seconds=0, environment="development")


@pytest.fixture
def service(uow_factory, principal_resolver, settings) -> PermissionService:
    """PermissionService over in-memory fakes, cache disabled."""
    return build_permission_service(uow_factory, principal_resolver, settings)
