"""
User Management Use Cases

All user-related business logic.
"""

from .assign_role_use_case import AssignRoleUseCase
from .create_user_use_case import CreateUserUseCase
from .dtos import CreateUserCommand, UserInfo

__all__ = [
    "CreateUserUseCase",
    "AssignRoleUseCase",
    "CreateUserCommand",
    "UserInfo",
]
