from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.movie_repository import MovieRepository
from src.adapter.repositories.permission_repository import PermissionRepository
from src.adapter.repositories.token_repository import TokenRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session, self.timeout)
        self.tokens = TokenRepository(self.session, self.timeout)
        self.permissions = PermissionRepository(self.session, self.timeout)
        self.movies = MovieRepository(self.session, self.timeout)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
