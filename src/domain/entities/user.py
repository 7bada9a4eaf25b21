"""
User Entity

Represents a registered account that can authenticate with bearer tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class User(SQLModel, table=True):
    """
    User entity - a registered account.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - activated flips from False to True exactly once
    - version starts at 1 and increments on every successful update
    - Permissions are resolved through users_permissions, never stored inline
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=500)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    activated: bool = Field(default=False)
    version: int = Field(default=1)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_activated", "activated"),)
