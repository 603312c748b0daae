"""Application interfaces (ports): repository protocols."""

from itam.application.interfaces.repositories import IPermissionRepository, IRoleRepository

__all__ = [
    "IPermissionRepository",
    "IRoleRepository",
]
