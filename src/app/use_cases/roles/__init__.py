"""
Role Use Cases

Analytics role resolution and portal role management.
"""

from .create_role_use_case import CreateRoleUseCase
from .delete_role_use_case import DeleteRoleUseCase
from .dtos import ResolvedPermissions, RoleInfo
from .resolve_permissions_use_case import ResolvePermissionsUseCase

__all__ = [
    "ResolvePermissionsUseCase",
    "CreateRoleUseCase",
    "DeleteRoleUseCase",
    "ResolvedPermissions",
    "RoleInfo",
]
