from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.adapter.repositories.base import BoundedRepository
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(BoundedRepository, IUserRepository):
    """User repository implementation using SQLModel"""

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self._run(self.session.exec(stmt))
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._run(self.session.exec(stmt))
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self._run(self.session.flush())
        await self._run(self.session.refresh(user))
        return user

    async def update_if_version(
        self, user_id: UUID, expected_version: int, **fields
    ) -> Optional[int]:
        """Version-checked update; id and version match in one statement"""
        stmt = (
            update(User)
            .where(User.id == user_id, User.version == expected_version)
            .values(**fields, version=User.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self._run(self.session.execute(stmt))
        if result.rowcount == 0:
            return None
        return expected_version + 1
