"""Application ports - interfaces for external adapters."""

from permatrix.application.ports.permission_checker import PermissionChecker
from permatrix.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
