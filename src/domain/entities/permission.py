"""
Permission Entities

Flat permission codes granted to users through a join table.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel


class Permission(SQLModel, table=True):
    """Permission code such as movies:read. Read-only at request time."""

    __tablename__ = "permissions"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=100)


class UserPermission(SQLModel, table=True):
    """Association between a user and a permission"""

    __tablename__ = "users_permissions"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    permission_id: int = Field(foreign_key="permissions.id", primary_key=True)
