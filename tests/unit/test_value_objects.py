"""Unit tests for value objects, entities and the decision rule."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from stratum.application.dto.permission_query import PermissionQuery
from stratum.domain.entities import Assignment, Permission
from stratum.domain.exceptions import InvalidArgument
from stratum.domain.policy import resolve_decision
from stratum.domain.value_objects import (
    DEFAULT_PRIORITIES,
    AssignmentContext,
    AssignmentLevel,
    PermissionName,
)


def _assignment(is_granted: bool, priority: int = 0, **context) -> Assignment:
    now = datetime.now(UTC)
    return Assignment(
        id=uuid4(),
        level=AssignmentLevel.USER,
        subject_id=uuid4(),
        permission_id=uuid4(),
        is_granted=is_granted,
        priority=priority,
        created_at=now,
        updated_at=now,
        context=AssignmentContext(**context),
    )


def test_default_priorities_increase_with_specificity() -> None:
    levels = list(AssignmentLevel)
    assert levels == [
        AssignmentLevel.ROLE,
        AssignmentLevel.GROUP,
        AssignmentLevel.USER,
        AssignmentLevel.MODEL,
        AssignmentLevel.OBJECT,
    ]
    assert [level.default_priority for level in levels] == [0, 50, 100, 150, 200]
    assert DEFAULT_PRIORITIES[AssignmentLevel.USER] == 100


def test_user_scoped_levels() -> None:
    assert not AssignmentLevel.ROLE.is_user_scoped
    assert not AssignmentLevel.GROUP.is_user_scoped
    assert AssignmentLevel.USER.is_user_scoped
    assert AssignmentLevel.MODEL.is_user_scoped
    assert AssignmentLevel.OBJECT.is_user_scoped


def test_context_validation_accepts_matching_fields() -> None:
    AssignmentContext().validate_for(AssignmentLevel.ROLE)
    AssignmentContext(expires_at=datetime.now(UTC)).validate_for(AssignmentLevel.USER)
    AssignmentContext(model_type="Patient").validate_for(AssignmentLevel.MODEL)
    AssignmentContext(object_type="Patient", object_id=uuid4()).validate_for(
        AssignmentLevel.OBJECT
    )


def test_context_validation_rejects_expiry_outside_user_level() -> None:
    with pytest.raises(InvalidArgument, match="expires_at"):
        AssignmentContext(expires_at=datetime.now(UTC)).validate_for(AssignmentLevel.GROUP)


def test_context_key_per_level() -> None:
    object_id = uuid4()
    assert AssignmentContext().key(AssignmentLevel.USER) == ""
    assert AssignmentContext(model_type="Patient").key(AssignmentLevel.MODEL) == "Patient"
    assert (
        AssignmentContext(object_type="Patient", object_id=object_id).key(AssignmentLevel.OBJECT)
        == f"Patient:{object_id}"
    )


def test_permission_name_parse() -> None:
    name = PermissionName.parse("Document.Read")

    assert name.resource == "Document"
    assert name.action == "Read"
    assert str(name) == "Document.Read"


@pytest.mark.parametrize("value", ["Document", "Document.", ".Read", "a.b.c", ""])
def test_permission_name_parse_rejects_malformed(value) -> None:
    with pytest.raises(InvalidArgument):
        PermissionName.parse(value)


def test_permission_name_and_matches() -> None:
    now = datetime.now(UTC)
    permission = Permission(
        id=uuid4(), resource="Document", action="Read", created_at=now, updated_at=now
    )

    assert permission.name == "Document.Read"
    assert permission.matches("document.read")
    assert not permission.matches("Document.Write")


def test_assignment_expiry_boundary() -> None:
    now = datetime.now(UTC)

    assert _assignment(True).is_expired(now) is False
    assert _assignment(True, expires_at=now).is_expired(now) is True
    assert _assignment(True, expires_at=now + timedelta(seconds=1)).is_expired(now) is False


def test_resolve_decision_default_deny() -> None:
    assert resolve_decision([]) is False


def test_resolve_decision_deny_wins_regardless_of_priority() -> None:
    candidates = [
        _assignment(True, priority=0),
        _assignment(False, priority=1000),
        _assignment(True, priority=-5),
    ]

    assert resolve_decision(candidates) is False
    assert resolve_decision(candidates[:1] + candidates[2:]) is True


def test_query_object_scope_needs_both_fields() -> None:
    assert PermissionQuery("Doc", "Read", object_id=uuid4()).includes_object is False
    assert PermissionQuery("Doc", "Read", object_type="Doc").includes_object is False
    assert PermissionQuery("Doc", "Read", object_id=uuid4(), object_type="Doc").includes_object
    assert PermissionQuery("Doc", "Read", model_type="Doc").includes_model


def test_query_cache_key_starts_with_user() -> None:
    user_id = uuid4()
    key = PermissionQuery("Doc", "Read", model_type="Doc").cache_key(user_id)

    assert key[0] == user_id
    assert key != PermissionQuery("Doc", "Read").cache_key(user_id)
