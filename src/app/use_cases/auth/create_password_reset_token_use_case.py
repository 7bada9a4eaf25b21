"""
Create Password Reset Token Use Case

Issues a short-lived password-reset token for an activated user.
"""

from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenScope
from src.domain.entities.token import generate_token
from src.libs.result import Error, Result, Return
from .dtos import EmailNotification, TokenIssuedResponse


class CreatePasswordResetTokenUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Email must belong to a registered user
    - User must be activated
    - Token scope is password-reset, lifetime from configuration (45 min)
    - Token is delivered by email, never in the response
    """

    def __init__(self, uow: UnitOfWork, ttl: Optional[timedelta] = None):
        self.uow = uow
        self.ttl = ttl or timedelta(minutes=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_MINUTES)

    async def execute(self, email: str) -> Result[TokenIssuedResponse]:
        """
        Errors:
            - EMAIL_NOT_FOUND: No user with this email
            - ACCOUNT_NOT_ACTIVATED: User must be activated first
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(
                    Error(
                        "EMAIL_NOT_FOUND",
                        "No matching email address found",
                        {"email": "no matching email address found"},
                    )
                )

            if not user.activated:
                return Return.err(
                    Error(
                        "ACCOUNT_NOT_ACTIVATED",
                        "User account must be activated",
                        {"email": "user account must be activated"},
                    )
                )

            plaintext, token = generate_token(user.id, self.ttl, TokenScope.password_reset)
            await self.uow.tokens.create(token)

            await self.uow.commit()

            return Return.ok(
                TokenIssuedResponse(
                    message="An email will be sent to you containing password reset instructions",
                    notification=EmailNotification(
                        recipient=user.email,
                        template="token_password_reset",
                        data={"password_reset_token": plaintext},
                    ),
                )
            )
