"""Application ports - interfaces for external adapters."""

from pontual.application.ports.permission_checker import PermissionChecker
from pontual.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
