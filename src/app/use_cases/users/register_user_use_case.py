from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import EmailNotification
from src.domain.entities import PermissionCode, TokenScope, User
from src.domain.entities.token import generate_token
from src.libs.result import Error, Result, Return
from .dtos import RegisterUserCommand, RegisterUserResponse, UserInfo
from .passwords import hash_password, validate_password


class RegisterUserUseCase:
    """
    Register User Use Case

    Business Logic:
    1. Validate password length (8-72 bytes)
    2. Reject duplicate email
    3. Create User with activated=False, version=1
    4. Grant movies:read
    5. Issue activation token (3 days)
    6. Commit atomically
    7. Return user plus the welcome email to send
    """

    def __init__(self, uow: UnitOfWork, activation_ttl: Optional[timedelta] = None):
        self.uow = uow
        self.activation_ttl = activation_ttl or timedelta(
            hours=ApplicationConfig.ACTIVATION_TOKEN_TTL_HOURS
        )

    async def execute(self, command: RegisterUserCommand) -> Result[RegisterUserResponse]:
        """
        Errors:
            - FAILED_VALIDATION: Missing or oversized name, password outside 8-72 bytes
            - EMAIL_ALREADY_EXISTS: Email already registered
        """
        if not command.name.strip():
            return Return.err(
                Error("FAILED_VALIDATION", "Name must be provided", {"name": "must be provided"})
            )
        if len(command.name.encode()) > 500:
            return Return.err(
                Error(
                    "FAILED_VALIDATION",
                    "Name must not be more than 500 bytes long",
                    {"name": "must not be more than 500 bytes long"},
                )
            )

        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error(
                        "EMAIL_ALREADY_EXISTS",
                        "A user with this email address already exists",
                        {"email": "a user with this email address already exists"},
                    )
                )

            user = User(
                name=command.name,
                email=command.email,
                password_hash=hash_password(command.password),
                activated=False,
            )
            user = await self.uow.users.create(user)

            await self.uow.permissions.add_for_user(user.id, PermissionCode.movies_read.value)

            plaintext, token = generate_token(
                user.id, self.activation_ttl, TokenScope.activation
            )
            await self.uow.tokens.create(token)

            await self.uow.commit()

            return Return.ok(
                RegisterUserResponse(
                    user=UserInfo.from_entity(user),
                    notification=EmailNotification(
                        recipient=user.email,
                        template="user_welcome",
                        data={"activation_token": plaintext, "user_id": str(user.id)},
                    ),
                )
            )
