"""Domain entities."""

from permatrix.domain.entities.module import Action, Module
from permatrix.domain.entities.permission import Permission
from permatrix.domain.entities.role import Role
from permatrix.domain.entities.user import User

__all__ = [
    "Action",
    "Module",
    "Permission",
    "Role",
    "User",
]
