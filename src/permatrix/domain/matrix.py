"""Matrix presenter - module x action grid with aggregate checkbox states.

Everything here is set arithmetic over permission names, so repeated
toggles are idempotent and independent of iteration order.
"""

from dataclasses import dataclass

from permatrix.domain.catalog import PermissionCatalog
from permatrix.domain.entities import Action, Module, Permission
from permatrix.domain.resolution import ResolvedPermissions
from permatrix.domain.value_objects import AggregateState, CellState


@dataclass(frozen=True)
class MatrixCell:
    """One defined (module, action) permission."""

    permission: Permission
    state: CellState
    inherited_from: tuple[str, ...] = ()

    @property
    def editable(self) -> bool:
        return self.state is not CellState.INHERITED


@dataclass(frozen=True)
class MatrixRow:
    """Module row; ``cells`` holds one entry per column, ``None`` when undefined."""

    module: Module
    cells: tuple[MatrixCell | None, ...]
    state: AggregateState


@dataclass(frozen=True)
class MatrixColumn:
    """Action column with its aggregate state."""

    action: Action
    state: AggregateState


@dataclass(frozen=True)
class PermissionMatrix:
    """Renderable grid, independent of any UI toolkit."""

    rows: tuple[MatrixRow, ...]
    columns: tuple[MatrixColumn, ...]

    def cell(self, module_key: str, action_key: str) -> MatrixCell | None:
        for row in self.rows:
            if row.module.key != module_key:
                continue
            for column, cell in zip(self.columns, row.cells):
                if column.action.key == action_key:
                    return cell
        return None

    def row_state(self, module_key: str) -> AggregateState:
        for row in self.rows:
            if row.module.key == module_key:
                return row.state
        return AggregateState.LOCKED

    def column_state(self, action_key: str) -> AggregateState:
        for column in self.columns:
            if column.action.key == action_key:
                return column.state
        return AggregateState.LOCKED


def cell_state(name: str, inherited: frozenset[str], selected: frozenset[str]) -> CellState:
    if name in inherited:
        return CellState.INHERITED
    if name in selected:
        return CellState.ACTIVE
    return CellState.INACTIVE


def aggregate_state(editable: frozenset[str], selected: frozenset[str]) -> AggregateState:
    """locked when nothing is editable, otherwise none / all / partial."""
    if not editable:
        return AggregateState.LOCKED
    checked = len(editable & selected)
    if checked == 0:
        return AggregateState.NONE
    if checked == len(editable):
        return AggregateState.ALL
    return AggregateState.PARTIAL


def toggle_group(editable: frozenset[str], selected: frozenset[str]) -> frozenset[str]:
    """Clear the group when fully selected, otherwise select all of it.

    A partial group always resolves to fully selected.
    """
    if not editable:
        return selected
    if editable <= selected:
        return selected - editable
    return selected | editable


def module_editable(
    catalog: PermissionCatalog, inherited: frozenset[str], module_key: str
) -> frozenset[str]:
    return catalog.module_names(module_key) - inherited


def action_editable(
    catalog: PermissionCatalog, inherited: frozenset[str], action_key: str
) -> frozenset[str]:
    return catalog.action_names(action_key) - inherited


def present(
    catalog: PermissionCatalog,
    resolved: ResolvedPermissions,
    selected: frozenset[str] | None = None,
) -> PermissionMatrix:
    """Build the grid for a resolver result and a direct selection.

    ``selected`` defaults to the resolved direct set.
    """
    if selected is None:
        selected = resolved.direct
    inherited = resolved.inherited
    columns = tuple(
        MatrixColumn(
            action=action,
            state=aggregate_state(action_editable(catalog, inherited, action.key), selected),
        )
        for action in catalog.actions
    )
    rows = []
    for module in catalog.modules:
        cells = []
        for column in columns:
            permission = module.permission_for(column.action.key)
            if permission is None:
                cells.append(None)
                continue
            cells.append(
                MatrixCell(
                    permission=permission,
                    state=cell_state(permission.name, inherited, selected),
                    inherited_from=resolved.inherited_from(permission.name),
                )
            )
        rows.append(
            MatrixRow(
                module=module,
                cells=tuple(cells),
                state=aggregate_state(module_editable(catalog, inherited, module.key), selected),
            )
        )
    return PermissionMatrix(rows=tuple(rows), columns=columns)
