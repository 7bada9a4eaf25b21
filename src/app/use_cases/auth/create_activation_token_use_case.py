"""
Create Activation Token Use Case

Issues a fresh activation token for a registered, not yet activated user.
"""

from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenScope
from src.domain.entities.token import generate_token
from src.libs.result import Error, Result, Return
from .dtos import EmailNotification, TokenIssuedResponse


class CreateActivationTokenUseCase:
    """
    Use case for re-sending activation tokens.

    Business Rules:
    - Email must belong to a registered user
    - User must not already be activated
    - Token scope is activation, lifetime from configuration (3 days)
    - Token is delivered by email, never in the response
    """

    def __init__(self, uow: UnitOfWork, ttl: Optional[timedelta] = None):
        self.uow = uow
        self.ttl = ttl or timedelta(hours=ApplicationConfig.ACTIVATION_TOKEN_TTL_HOURS)

    async def execute(self, email: str) -> Result[TokenIssuedResponse]:
        """
        Errors:
            - EMAIL_NOT_FOUND: No user with this email
            - ALREADY_ACTIVATED: User has already been activated
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

            if user.activated:
                return Return.err(
                    Error(
                        "ALREADY_ACTIVATED",
                        "User has already been activated",
                        {"email": "user has already been activated"},
                    )
                )

            plaintext, token = generate_token(user.id, self.ttl, TokenScope.activation)
            await self.uow.tokens.create(token)

            await self.uow.commit()

            return Return.ok(
                TokenIssuedResponse(
                    message="An email will be sent to you containing activation instructions",
                    notification=EmailNotification(
                        recipient=user.email,
                        template="token_activation",
                        data={"activation_token": plaintext},
                    ),
                )
            )
