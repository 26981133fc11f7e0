"""Permission entity - immutable catalog entry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Permission:
    """One (module, action) pair with its display labels."""

    module: str
    action: str
    label: str
    module_label: str
    action_label: str

    @property
    def name(self) -> str:
        return f"{self.module}.{self.action}"
