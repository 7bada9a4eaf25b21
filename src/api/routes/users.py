from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.mailer import IMailer, send_in_background
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    ActivateUserResponse,
    ActivateUserUseCase,
    RegisterUserCommand,
    UpdatePasswordResponse,
    UpdatePasswordUseCase,
    UserInfo,
    RegisterUserUseCase,
)
from src.depends import get_mailer, get_unit_of_work

router = APIRouter(prefix="/v1/users", tags=["Users"])


class RegisterUserRequest(BaseModel):
    """
    Register user HTTP request payload

    Byte-length rules for name and password live in the use case.
    """

    name: str = Field(..., description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="Password, 8 to 72 bytes")


class RegisteredUser(BaseModel):
    user: UserInfo


@router.post("", status_code=status.HTTP_202_ACCEPTED, response_model=RegisteredUser)
async def register_user(
    request: RegisterUserRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: IMailer = Depends(get_mailer),
):
    """
    Register User

    Creates an inactive account holding movies:read and emails an activation
    token once the response has been sent.

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid name, email or password
    """
    command = RegisterUserCommand(
        name=request.name, email=request.email, password=request.password
    )
    result = await RegisterUserUseCase(uow).execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "FAILED_VALIDATION":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_CONTENT)
        raise ServerError(error)

    notification = result.value.notification
    background_tasks.add_task(
        send_in_background, mailer, notification.recipient, notification.template, notification.data
    )
    return RegisteredUser(user=result.value.user)


class ActivateUserRequest(BaseModel):
    token: str = Field(..., description="Activation token from the welcome email")


@router.put("/activated", status_code=status.HTTP_200_OK, response_model=ActivateUserResponse)
async def activate_user(
    request: ActivateUserRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Activate User

    Raises:
        - 409 Conflict: User record changed concurrently
        - 422 Unprocessable Entity: Invalid or expired activation token
    """
    result = await ActivateUserUseCase(uow).execute(request.token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_CONTENT)
        elif error.code == "EDIT_CONFLICT":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class UpdatePasswordRequest(BaseModel):
    password: str = Field(..., description="New password, 8 to 72 bytes")
    token: str = Field(..., description="Password reset token")


@router.put("/password", status_code=status.HTTP_200_OK, response_model=UpdatePasswordResponse)
async def update_password(
    request: UpdatePasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Reset Password

    Raises:
        - 409 Conflict: User record changed concurrently
        - 422 Unprocessable Entity: Invalid password or invalid/expired token
    """
    result = await UpdatePasswordUseCase(uow).execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "FAILED_VALIDATION"):
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_CONTENT)
        elif error.code == "EDIT_CONFLICT":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
