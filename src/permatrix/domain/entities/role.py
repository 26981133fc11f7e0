"""Role entity for RBAC."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass
class Role:
    """Role - named bundle of permission names granted to its users."""

    id: UUID
    name: str
    label: str
    description: str = ""
    permissions: frozenset[str] = field(default_factory=frozenset)
