"""
Create Authentication Token Use Case

Exchanges email and password for a bearer token.
"""

from datetime import timedelta
from typing import Optional

import bcrypt

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users.passwords import validate_password
from src.domain.entities import TokenScope
from src.domain.entities.token import generate_token
from src.libs.result import Error, Result, Return
from .dtos import AuthenticationTokenInfo, AuthenticationTokenResponse

# Compared against when the email is unknown so both paths cost one bcrypt check
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class CreateAuthenticationTokenUseCase:
    """
    Use case for issuing authentication tokens.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password give the same error
    - Token scope is authentication, lifetime from configuration (24h)
    - Existing tokens are left untouched
    """

    def __init__(self, uow: UnitOfWork, ttl: Optional[timedelta] = None):
        self.uow = uow
        self.ttl = ttl or timedelta(hours=ApplicationConfig.AUTHENTICATION_TOKEN_TTL_HOURS)

    async def execute(self, email: str, password: str) -> Result[AuthenticationTokenResponse]:
        """
        Execute token issuance.

        Returns:
            Result with the plaintext token and expiry, or Error

        Errors:
            - FAILED_VALIDATION: Password outside 8-72 bytes
            - INVALID_CREDENTIALS: Email unknown or password mismatch
        """
        # bcrypt refuses passwords over 72 bytes, so check the shape first
        password_validation = validate_password(password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid authentication credentials")
                )

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid authentication credentials")
                )

            plaintext, token = generate_token(user.id, self.ttl, TokenScope.authentication)
            await self.uow.tokens.create(token)

            await self.uow.commit()

            return Return.ok(
                AuthenticationTokenResponse(
                    authentication_token=AuthenticationTokenInfo(
                        token=plaintext, expiry=token.expiry
                    )
                )
            )
