from datetime import timedelta
from typing import Any, Dict, List

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.permission_repository import PermissionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.mailer import IMailer
from src.depends import get_mailer, get_unit_of_work
from src.domain.entities import TokenScope, User
from src.domain.entities.token import generate_token


class TestConfig(ApplicationConfig):
    ENV = "testing"
    LIMITER_ENABLED = False


class RecordingMailer(IMailer):
    """Captures outgoing emails instead of talking to SMTP"""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []

    async def send(self, recipient: str, template: str, data: Dict[str, Any]) -> None:
        self.sent.append({"recipient": recipient, "template": template, "data": data})


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def app_config():
    return TestConfig


@pytest_asyncio.fixture
async def app(app_config, session_factory, mailer):
    from src.api.app import create_app

    app = create_app(app_config)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_mailer] = lambda: mailer
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_user(db_session):
    """Insert a user directly, returning (user, bearer token plaintext)"""

    async def _create_user(
        email: str = "alice@example.com",
        password: str = "pa55word123",
        activated: bool = True,
        permissions=("movies:read",),
        token_ttl: timedelta = timedelta(hours=24),
    ):
        user = User(
            name="Alice",
            email=email,
            password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
            activated=activated,
        )
        db_session.add(user)
        await db_session.flush()

        await PermissionRepository(db_session).add_for_user(user.id, *permissions)

        plaintext, token = generate_token(user.id, token_ttl, TokenScope.authentication)
        db_session.add(token)
        await db_session.commit()
        return user, plaintext

    return _create_user
