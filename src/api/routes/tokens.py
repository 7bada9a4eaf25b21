from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.mailer import IMailer, send_in_background
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthenticationTokenResponse,
    CreateActivationTokenUseCase,
    CreateAuthenticationTokenUseCase,
    CreatePasswordResetTokenUseCase,
)
from src.depends import get_mailer, get_unit_of_work

router = APIRouter(prefix="/v1/tokens", tags=["Tokens"])


class CreateAuthenticationTokenRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class EmailRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


class TokenRequestAccepted(BaseModel):
    message: str


@router.post(
    "/authentication",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthenticationTokenResponse,
)
async def create_authentication_token(
    request: CreateAuthenticationTokenRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Issue Bearer Token

    Raises:
        - 401 Unauthorized: Unknown email or wrong password
        - 422 Unprocessable Entity: Password outside 8-72 bytes
    """
    result = await CreateAuthenticationTokenUseCase(uow).execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "FAILED_VALIDATION":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_CONTENT)
        raise ServerError(error)

    return result.value


@router.post(
    "/activation", status_code=status.HTTP_202_ACCEPTED, response_model=TokenRequestAccepted
)
async def create_activation_token(
    request: EmailRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: IMailer = Depends(get_mailer),
):
    """
    Re-send Activation Token

    Raises:
        - 422 Unprocessable Entity: Unknown email or account already activated
    """
    result = await CreateActivationTokenUseCase(uow).execute(request.email)

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_NOT_FOUND", "ALREADY_ACTIVATED"):
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_CONTENT)
        raise ServerError(error)

    notification = result.value.notification
    background_tasks.add_task(
        send_in_background, mailer, notification.recipient, notification.template, notification.data
    )
    return TokenRequestAccepted(message=result.value.message)


@router.post(
    "/password-reset", status_code=status.HTTP_202_ACCEPTED, response_model=TokenRequestAccepted
)
async def create_password_reset_token(
    request: EmailRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: IMailer = Depends(get_mailer),
):
    """
    Send Password Reset Token

    Raises:
        - 422 Unprocessable Entity: Unknown email or account not activated
    """
    result = await CreatePasswordResetTokenUseCase(uow).execute(request.email)

    if result.is_err():
        error = result.error
        if error.code in ("EMAIL_NOT_FOUND", "ACCOUNT_NOT_ACTIVATED"):
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_CONTENT)
        raise ServerError(error)

    notification = result.value.notification
    background_tasks.add_task(
        send_in_background, mailer, notification.recipient, notification.template, notification.data
    )
    return TokenRequestAccepted(message=result.value.message)
