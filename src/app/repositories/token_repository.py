from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Token, TokenScope


class ITokenRepository(ABC):
    """Token repository interface - application layer"""

    @abstractmethod
    async def create(self, token: Token) -> Token:
        """Persist a newly issued token"""
        pass

    @abstractmethod
    async def get_by_hash(self, token_hash: str, scope: TokenScope) -> Optional[Token]:
        """Get token by hash, restricted to a scope"""
        pass

    @abstractmethod
    async def delete_all_for_user(self, user_id: UUID, scope: TokenScope) -> int:
        """Delete every token of a scope for a user, returning the count"""
        pass
