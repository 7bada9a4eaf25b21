"""
Update Password Use Case

Sets a new password using a password-reset token.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import TokenScope
from src.domain.entities.token import hash_token, is_valid_token_plaintext
from src.libs.result import Error, Result, Return
from .dtos import UpdatePasswordResponse
from .passwords import hash_password, validate_password


class UpdatePasswordUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - New password must be 8-72 bytes
    - Token must be structurally valid, in the password-reset scope, unexpired
    - Password hash is replaced through a version-checked update
    - Every password-reset token of the user is deleted (single use)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token_plaintext: str, new_password: str
    ) -> Result[UpdatePasswordResponse]:
        """
        Errors:
            - FAILED_VALIDATION: Password outside 8-72 bytes
            - INVALID_TOKEN: Malformed, unknown or expired reset token
            - EDIT_CONFLICT: User record changed concurrently
        """
        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        if not is_valid_token_plaintext(token_plaintext):
            return Return.err(
                Error(
                    "INVALID_TOKEN",
                    "Invalid or expired password reset token",
                    {"token": "must be 26 bytes long"},
                )
            )

        async with self.uow:
            token = await self.uow.tokens.get_by_hash(
                hash_token(token_plaintext), TokenScope.password_reset
            )
            if token is None or token.is_expired(utc_now()):
                return Return.err(
                    Error(
                        "INVALID_TOKEN",
                        "Invalid or expired password reset token",
                        {"token": "invalid or expired password reset token"},
                    )
                )

            user = await self.uow.users.get_by_id(token.user_id)
            if user is None:
                return Return.err(
                    Error(
                        "INVALID_TOKEN",
                        "Invalid or expired password reset token",
                        {"token": "invalid or expired password reset token"},
                    )
                )

            new_version = await self.uow.users.update_if_version(
                user.id, user.version, password_hash=hash_password(new_password)
            )
            if new_version is None:
                return Return.err(
                    Error(
                        "EDIT_CONFLICT",
                        "Unable to update the record due to an edit conflict, please try again",
                    )
                )

            await self.uow.tokens.delete_all_for_user(user.id, TokenScope.password_reset)

            await self.uow.commit()

            return Return.ok(
                UpdatePasswordResponse(message="Your password was successfully reset")
            )
