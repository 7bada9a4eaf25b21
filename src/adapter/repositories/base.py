import asyncio
from typing import Awaitable, Optional, TypeVar

from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.app.errors import StoreTimeoutError

T = TypeVar("T")


class BoundedRepository:
    """Base for repositories whose store calls are bounded by a timeout"""

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout if timeout is not None else ApplicationConfig.DB_QUERY_TIMEOUT

    async def _run(self, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise StoreTimeoutError(
                f"{type(self).__name__} store call exceeded {self.timeout}s"
            ) from exc
