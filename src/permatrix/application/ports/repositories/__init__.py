"""Repository ports."""

from permatrix.application.ports.repositories.grant_repository import GrantRepository
from permatrix.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from permatrix.application.ports.repositories.role_repository import RoleRepository
from permatrix.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "GrantRepository",
    "PermissionRepository",
    "RoleRepository",
    "UserRepository",
]
