"""Unit tests for domain exceptions."""

import pytest

from stratum.domain.exceptions import (
    InvalidArgument,
    NotFound,
    PermissionDenied,
    StoreUnavailable,
    StratumError,
)


@pytest.mark.parametrize(
    "exc_type", [PermissionDenied, NotFound, InvalidArgument, StoreUnavailable]
)
def test_inherits_stratum_error(exc_type) -> None:
    assert issubclass(exc_type, StratumError)


def test_raise_not_found_catchable_as_stratum_error() -> None:
    """NotFound can be caught as StratumError."""
    with pytest.raises(StratumError):
        raise NotFound("Permission", "123")


def test_exception_message_preserved() -> None:
    """Exception message is preserved when raised."""
    msg = "User may not Write Document"
    with pytest.raises(PermissionDenied, match=msg):
        raise PermissionDenied(msg)


def test_store_unavailable_is_not_a_denial() -> None:
    """Callers must be able to tell a store failure from a decision."""
    assert not issubclass(StoreUnavailable, PermissionDenied)
