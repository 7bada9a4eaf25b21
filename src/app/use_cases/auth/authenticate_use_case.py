"""
Authenticate Use Case

Resolves an Authorization header to a request identity.
"""

import logging
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import TokenScope
from src.domain.entities.token import hash_token, is_valid_token_plaintext
from src.domain.identity import ANONYMOUS_USER, UserIdentity
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class AuthenticateUseCase:
    """
    Use case for bearer-token authentication.

    Business Rules:
    - No header resolves to the anonymous identity (not a failure)
    - Header must be exactly "Bearer <token>", else MALFORMED_CREDENTIAL
    - Token is checked for length/charset before any store lookup
    - Lookup is restricted to the authentication scope
    - Unknown or expired tokens fail with INVALID_CREDENTIAL
    - Resolved identity carries the user's permission codes
    - Token values are never logged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, authorization: Optional[str]) -> Result[UserIdentity]:
        """
        Execute authentication.

        Args:
            authorization: Raw Authorization header value, or None when absent

        Returns:
            Result with the resolved UserIdentity, or Error

        Errors:
            - MALFORMED_CREDENTIAL: Header shape or token structure invalid
            - INVALID_CREDENTIAL: Token unknown, wrong scope or expired
        """
        if not authorization:
            return Return.ok(ANONYMOUS_USER)

        parts = authorization.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer":
            return Return.err(
                Error("MALFORMED_CREDENTIAL", "Invalid or missing authentication token")
            )

        plaintext = parts[1]
        if not is_valid_token_plaintext(plaintext):
            return Return.err(
                Error("MALFORMED_CREDENTIAL", "Invalid or missing authentication token")
            )

        async with self.uow:
            token = await self.uow.tokens.get_by_hash(
                hash_token(plaintext), TokenScope.authentication
            )
            if token is None or token.is_expired(utc_now()):
                logger.info("Authentication failed: unknown or expired token")
                return Return.err(
                    Error("INVALID_CREDENTIAL", "Invalid or missing authentication token")
                )

            user = await self.uow.users.get_by_id(token.user_id)
            if user is None:
                return Return.err(
                    Error("INVALID_CREDENTIAL", "Invalid or missing authentication token")
                )

            permissions = await self.uow.permissions.get_all_for_user(user.id)

            return Return.ok(
                UserIdentity(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    activated=user.activated,
                    permissions=frozenset(permissions),
                )
            )
