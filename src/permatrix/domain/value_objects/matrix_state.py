"""Matrix cell and aggregate checkbox states."""

from enum import StrEnum


class CellState(StrEnum):
    """State of one permission cell in the matrix."""

    INHERITED = "inherited"
    ACTIVE = "active"
    INACTIVE = "inactive"


class AggregateState(StrEnum):
    """State of a module row or action column over its editable permissions."""

    LOCKED = "locked"
    NONE = "none"
    ALL = "all"
    PARTIAL = "partial"
