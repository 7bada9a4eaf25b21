from typing import Optional

from fastapi import Depends, Header, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.smtp_mailer import RetryPolicy, SmtpMailer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.authorization import activated_policy, authorize, permission_policy
from src.app.services.mailer import IMailer
from src.app.services.metrics import RequestMetrics
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateUseCase
from src.domain.identity import UserIdentity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

mailer = SmtpMailer(
    host=ApplicationConfig.SMTP_HOST,
    port=ApplicationConfig.SMTP_PORT,
    username=ApplicationConfig.SMTP_USERNAME,
    password=ApplicationConfig.SMTP_PASSWORD,
    sender=ApplicationConfig.SMTP_SENDER,
    timeout=ApplicationConfig.SMTP_TIMEOUT,
    retry_policy=RetryPolicy(
        max_attempts=ApplicationConfig.MAIL_MAX_ATTEMPTS,
        delay_seconds=ApplicationConfig.MAIL_RETRY_DELAY,
    ),
)

_AUTHORIZATION_STATUS = {
    "AUTHENTICATION_REQUIRED": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_NOT_ACTIVATED": status.HTTP_403_FORBIDDEN,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
}


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session, ApplicationConfig.DB_QUERY_TIMEOUT)


def get_mailer() -> IMailer:
    return mailer


def get_metrics(request: Request) -> RequestMetrics:
    return request.app.state.metrics


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    metrics: RequestMetrics = Depends(get_metrics),
) -> UserIdentity:
    """
    Resolve the Authorization header to a request identity.

    A missing header yields the anonymous identity; a malformed, unknown or
    expired bearer token is rejected with 401 and WWW-Authenticate: Bearer.
    """
    result = await AuthenticateUseCase(uow).execute(authorization)

    if result.is_err():
        metrics.increment("authentication_failed")
        raise ClientError(
            result.error,
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = result.value
    if identity.is_anonymous:
        metrics.increment("authentication_anonymous")
    else:
        metrics.increment("authentication_succeeded")
    return identity


def _enforce(identity: UserIdentity, policy) -> UserIdentity:
    result = authorize(identity, policy)
    if result.is_err():
        raise ClientError(result.error, status_code=_AUTHORIZATION_STATUS[result.error.code])
    return identity


async def require_activated_user(
    identity: UserIdentity = Depends(get_current_user),
) -> UserIdentity:
    return _enforce(identity, activated_policy())


def require_permission(code: str):
    """Dependency factory: activated user holding permission `code`"""
    policy = permission_policy(code)

    async def dependency(identity: UserIdentity = Depends(get_current_user)) -> UserIdentity:
        return _enforce(identity, policy)

    return dependency
