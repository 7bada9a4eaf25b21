from abc import ABC, abstractmethod
from typing import FrozenSet
from uuid import UUID


class IPermissionRepository(ABC):
    """Permission repository interface - application layer"""

    @abstractmethod
    async def get_all_for_user(self, user_id: UUID) -> FrozenSet[str]:
        """Get the permission codes granted to a user"""
        pass

    @abstractmethod
    async def add_for_user(self, user_id: UUID, *codes: str) -> None:
        """Grant permission codes to a user, creating unknown codes"""
        pass
