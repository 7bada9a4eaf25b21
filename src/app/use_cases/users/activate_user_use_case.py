"""
Activate User Use Case

Consumes an activation token and flips the user's activated flag.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import TokenScope
from src.domain.entities.token import hash_token, is_valid_token_plaintext
from src.libs.result import Error, Result, Return
from .dtos import ActivateUserResponse, UserInfo


class ActivateUserUseCase:
    """
    Use case for account activation.

    Business Rules:
    - Token must be structurally valid, in the activation scope, unexpired
    - activated flips False -> True through a version-checked update
    - Every activation token of the user is deleted (single use)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token_plaintext: str) -> Result[ActivateUserResponse]:
        """
        Errors:
            - INVALID_TOKEN: Malformed, unknown or expired activation token
            - EDIT_CONFLICT: User record changed concurrently
        """
        if not is_valid_token_plaintext(token_plaintext):
            return Return.err(
                Error(
                    "INVALID_TOKEN",
                    "Invalid or expired activation token",
                    {"token": "must be 26 bytes long"},
                )
            )

        async with self.uow:
            token = await self.uow.tokens.get_by_hash(
                hash_token(token_plaintext), TokenScope.activation
            )
            if token is None or token.is_expired(utc_now()):
                return Return.err(
                    Error(
                        "INVALID_TOKEN",
                        "Invalid or expired activation token",
                        {"token": "invalid or expired activation token"},
                    )
                )

            user = await self.uow.users.get_by_id(token.user_id)
            if user is None:
                return Return.err(
                    Error(
                        "INVALID_TOKEN",
                        "Invalid or expired activation token",
                        {"token": "invalid or expired activation token"},
                    )
                )

            new_version = await self.uow.users.update_if_version(
                user.id, user.version, activated=True
            )
            if new_version is None:
                return Return.err(
                    Error(
                        "EDIT_CONFLICT",
                        "Unable to update the record due to an edit conflict, please try again",
                    )
                )

            await self.uow.tokens.delete_all_for_user(user.id, TokenScope.activation)

            await self.uow.commit()

            info = UserInfo.from_entity(user).model_copy(update={"activated": True})
            return Return.ok(ActivateUserResponse(user=info))
