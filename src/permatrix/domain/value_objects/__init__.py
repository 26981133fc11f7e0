"""Domain value objects."""

from permatrix.domain.value_objects.edit_phase import EditPhase, can_transition
from permatrix.domain.value_objects.matrix_state import AggregateState, CellState
from permatrix.domain.value_objects.permission_name import PermissionName
from permatrix.domain.value_objects.permission_state import PermissionState

__all__ = [
    "AggregateState",
    "CellState",
    "EditPhase",
    "PermissionName",
    "PermissionState",
    "can_transition",
]
