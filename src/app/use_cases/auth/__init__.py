"""
Authentication Use Cases

All authentication-related business logic.
"""

from .dtos import LoginResponse
from .login_use_case import LoginUseCase

__all__ = [
    "LoginUseCase",
    "LoginResponse",
]
