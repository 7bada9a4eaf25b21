from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.adapter.repositories.base import BoundedRepository
from src.app.repositories.token_repository import ITokenRepository
from src.domain.entities import Token, TokenScope


class TokenRepository(BoundedRepository, ITokenRepository):
    """Token repository implementation using SQLModel"""

    async def create(self, token: Token) -> Token:
        """Persist a newly issued token"""
        self.session.add(token)
        await self._run(self.session.flush())
        return token

    async def get_by_hash(self, token_hash: str, scope: TokenScope) -> Optional[Token]:
        """Get token by hash, restricted to a scope"""
        stmt = select(Token).where(Token.hash == token_hash, Token.scope == scope)
        result = await self._run(self.session.exec(stmt))
        return result.one_or_none()

    async def delete_all_for_user(self, user_id: UUID, scope: TokenScope) -> int:
        """Delete every token of a scope for a user"""
        stmt = (
            delete(Token)
            .where(Token.user_id == user_id, Token.scope == scope)
            .execution_options(synchronize_session=False)
        )
        result = await self._run(self.session.execute(stmt))
        await self._run(self.session.flush())
        return result.rowcount
