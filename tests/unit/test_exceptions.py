"""Unit tests for domain exceptions."""

import pytest

from permatrix.domain.exceptions import (
    Conflict,
    NotFound,
    PermatrixError,
    PersistenceFailure,
    Unauthorized,
    ValidationFailure,
)


@pytest.mark.parametrize(
    "cls", [NotFound, Unauthorized, Conflict, ValidationFailure, PersistenceFailure]
)
def test_error_kinds_inherit_permatrix_error(cls) -> None:
    assert issubclass(cls, PermatrixError)


def test_kinds_are_distinct() -> None:
    kinds = {c.kind for c in (NotFound, Unauthorized, Conflict, ValidationFailure, PersistenceFailure)}
    assert len(kinds) == 5


def test_not_found_message_includes_key() -> None:
    err = NotFound("User", "42")
    assert str(err) == "User not found: 42"
    assert err.entity == "User"
    assert str(NotFound("Role")) == "Role not found"


def test_validation_failure_lists_invalid_sorted() -> None:
    err = ValidationFailure("bad", invalid=["z.ver", "a.ver"])
    assert err.invalid == ["a.ver", "z.ver"]
    assert ValidationFailure("bad").invalid == []


def test_conflict_carries_permissions() -> None:
    err = Conflict("changed", permissions=["b.x", "a.x"])
    assert err.permissions == ["a.x", "b.x"]


def test_raise_unauthorized_catchable_as_permatrix_error() -> None:
    with pytest.raises(PermatrixError):
        raise Unauthorized("no access")
