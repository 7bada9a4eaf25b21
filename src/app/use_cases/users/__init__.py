"""
User Management Use Cases

All user-related business logic.
"""

from .register_user_use_case import RegisterUserUseCase
from .activate_user_use_case import ActivateUserUseCase
from .update_password_use_case import UpdatePasswordUseCase
from .dtos import (
    ActivateUserResponse,
    RegisterUserCommand,
    RegisterUserResponse,
    UpdatePasswordResponse,
    UserInfo,
)

__all__ = [
    "RegisterUserUseCase",
    "ActivateUserUseCase",
    "UpdatePasswordUseCase",
    "ActivateUserResponse",
    "RegisterUserCommand",
    "RegisterUserResponse",
    "UpdatePasswordResponse",
    "UserInfo",
]
