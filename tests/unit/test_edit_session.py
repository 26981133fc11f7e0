"""Unit tests for EditSession transitions."""

from uuid import uuid4

import pytest

from permatrix.domain.edit_session import EditSession
from permatrix.domain.entities import Role
from permatrix.domain.exceptions import NotFound
from permatrix.domain.resolution import resolve
from permatrix.domain.value_objects import AggregateState, CellState

from tests.conftest import productos_catalog


def _session(inherited=(), direct=()) -> EditSession:
    catalog = productos_catalog()
    role = Role(id=uuid4(), name="r", label="R", permissions=frozenset(inherited))
    return EditSession.open(catalog, resolve(catalog, [role], direct))


def test_open_has_no_changes() -> None:
    session = _session(inherited={"productos.ver"}, direct={"ventas.ver"})
    assert not session.has_changes
    assert session.current == {"ventas.ver"}


def test_open_excludes_redundant_direct_grants() -> None:
    session = _session(inherited={"productos.ver"}, direct={"productos.ver"})
    assert session.current == frozenset()


def test_rebase_keeps_picks_not_now_inherited() -> None:
    session = _session(inherited={"productos.ver"})
    session = session.toggle_one("ventas.ver").toggle_one("clientes.ver")
    fresh = _session(inherited={"clientes.ver"}, direct={"ventas.eliminar"})

    rebased = session.rebase(fresh.catalog, fresh.resolved)

    assert rebased.inherited == {"clientes.ver"}
    assert rebased.original == {"ventas.eliminar"}
    assert rebased.current == {"ventas.ver"}
    assert rebased.has_changes


def test_toggle_one_returns_new_session() -> None:
    session = _session()
    toggled = session.toggle_one("ventas.ver")
    assert toggled.current == {"ventas.ver"}
    assert toggled.has_changes
    assert toggled.added == {"ventas.ver"}
    assert session.current == frozenset()


def test_toggle_one_back_clears_changes() -> None:
    session = _session(direct={"ventas.ver"})
    toggled = session.toggle_one("ventas.ver")
    assert toggled.removed == {"ventas.ver"}
    assert not toggled.toggle_one("ventas.ver").has_changes


def test_toggle_inherited_is_noop() -> None:
    session = _session(inherited={"productos.ver"})
    assert session.toggle_one("productos.ver") is session


def test_toggle_unknown_name_raises() -> None:
    with pytest.raises(NotFound):
        _session().toggle_one("legacy.ver")


def test_eliminar_column_all_then_none() -> None:
    session = _session()
    assert session.action_state("eliminar") is AggregateState.NONE

    selected = session.toggle_action("eliminar")
    assert selected.action_state("eliminar") is AggregateState.ALL
    assert selected.current == {"productos.eliminar", "clientes.eliminar", "ventas.eliminar"}

    cleared = selected.toggle_action("eliminar")
    assert cleared.action_state("eliminar") is AggregateState.NONE
    assert cleared.current == frozenset()


def test_partial_module_toggles_to_all() -> None:
    session = _session(inherited={"productos.ver", "productos.crear"}, direct={"productos.editar"})
    assert session.module_state("productos") is AggregateState.PARTIAL

    toggled = session.toggle_module("productos")

    assert toggled.module_state("productos") is AggregateState.ALL
    assert toggled.current == {"productos.editar", "productos.eliminar"}
    assert toggled.inherited == {"productos.ver", "productos.crear"}


def test_module_toggle_never_touches_inherited() -> None:
    session = _session(inherited={"ventas.ver"})
    cleared = session.toggle_module("ventas").toggle_module("ventas")
    assert cleared.current == frozenset()
    assert cleared.matrix().cell("ventas", "ver").state is CellState.INHERITED


def test_discard_restores_original() -> None:
    session = _session(direct={"ventas.ver"})
    edited = session.toggle_one("ventas.ver").toggle_one("clientes.ver")
    restored = edited.discard()
    assert restored.current == {"ventas.ver"}
    assert not restored.has_changes


def test_submission_is_inherited_plus_selection() -> None:
    session = _session(inherited={"productos.ver"}).toggle_one("ventas.ver")
    assert session.submission() == {"productos.ver", "ventas.ver"}


def test_toggle_order_independent() -> None:
    session = _session()
    a = session.toggle_one("ventas.ver").toggle_action("eliminar")
    b = session.toggle_action("eliminar").toggle_one("ventas.ver")
    assert a.current == b.current
