"""Authorization context DTO - passed explicitly into use cases."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AuthContext:
    """Caller identity, super-admin override and effective permissions."""

    actor_id: str
    is_super_admin: bool = False
    permissions: frozenset[str] = field(default_factory=frozenset)

    def has(self, name: str) -> bool:
        return self.is_super_admin or name in self.permissions
