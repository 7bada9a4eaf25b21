"""
User Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation.
"""

from datetime import datetime

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import EmailNotification
from src.domain.entities import User


class RegisterUserCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    name: str
    email: str
    password: str


class UserInfo(BaseModel):
    """User information in responses"""

    id: str
    name: str
    email: str
    activated: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            activated=user.activated,
            created_at=user.created_at,
        )


class RegisterUserResponse(BaseModel):
    """Response for register user use case"""

    user: UserInfo
    notification: EmailNotification


class ActivateUserResponse(BaseModel):
    """Response for activate user use case"""

    user: UserInfo


class UpdatePasswordResponse(BaseModel):
    """Response for update password use case"""

    message: str
