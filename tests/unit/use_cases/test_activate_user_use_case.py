from datetime import timedelta
from uuid import uuid4

import bcrypt
import pytest

from src.app.use_cases.users import ActivateUserUseCase, UpdatePasswordUseCase
from src.domain.entities import TokenScope, User
from src.domain.entities.token import generate_token


@pytest.fixture
def user():
    return User(
        id=uuid4(),
        name="Alice",
        email="alice@example.com",
        password_hash="x" * 60,
        activated=False,
        version=1,
    )


@pytest.mark.asyncio
async def test_activate_user(mock_uow, user):
    plaintext, token = generate_token(user.id, timedelta(days=3), TokenScope.activation)
    mock_uow.tokens.get_by_hash.return_value = token
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.update_if_version.return_value = 2

    result = await ActivateUserUseCase(mock_uow).execute(plaintext)

    assert result.is_ok()
    assert result.value.user.activated is True
    mock_uow.users.update_if_version.assert_awaited_once_with(user.id, 1, activated=True)
    mock_uow.tokens.delete_all_for_user.assert_awaited_once_with(user.id, TokenScope.activation)
    mock_uow.commit.assert_awaited_once()
    # The loaded entity is left untouched
    assert user.activated is False


@pytest.mark.asyncio
async def test_activate_looks_up_activation_scope_only(mock_uow):
    plaintext, _ = generate_token(uuid4(), timedelta(days=3), TokenScope.authentication)

    result = await ActivateUserUseCase(mock_uow).execute(plaintext)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    assert mock_uow.tokens.get_by_hash.call_args.args[1] == TokenScope.activation


@pytest.mark.asyncio
async def test_activate_expired_token(mock_uow, user):
    plaintext, token = generate_token(user.id, timedelta(seconds=-1), TokenScope.activation)
    mock_uow.tokens.get_by_hash.return_value = token

    result = await ActivateUserUseCase(mock_uow).execute(plaintext)

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.users.update_if_version.assert_not_awaited()


@pytest.mark.asyncio
async def test_activate_malformed_token(mock_uow):
    result = await ActivateUserUseCase(mock_uow).execute("not-a-token")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    mock_uow.tokens.get_by_hash.assert_not_awaited()


@pytest.mark.asyncio
async def test_activate_edit_conflict(mock_uow, user):
    plaintext, token = generate_token(user.id, timedelta(days=3), TokenScope.activation)
    mock_uow.tokens.get_by_hash.return_value = token
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.update_if_version.return_value = None

    result = await ActivateUserUseCase(mock_uow).execute(plaintext)

    assert result.is_err()
    assert result.error.code == "EDIT_CONFLICT"
    mock_uow.tokens.delete_all_for_user.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_password(mock_uow, user):
    plaintext, token = generate_token(user.id, timedelta(minutes=45), TokenScope.password_reset)
    mock_uow.tokens.get_by_hash.return_value = token
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.update_if_version.return_value = 2

    result = await UpdatePasswordUseCase(mock_uow).execute(plaintext, "n3w-pa55word")

    assert result.is_ok()
    args, kwargs = mock_uow.users.update_if_version.call_args
    assert args == (user.id, 1)
    assert bcrypt.checkpw(b"n3w-pa55word", kwargs["password_hash"].encode())
    mock_uow.tokens.delete_all_for_user.assert_awaited_once_with(
        user.id, TokenScope.password_reset
    )


@pytest.mark.asyncio
async def test_update_password_rejects_short_password(mock_uow):
    plaintext, _ = generate_token(uuid4(), timedelta(minutes=45), TokenScope.password_reset)

    result = await UpdatePasswordUseCase(mock_uow).execute(plaintext, "short")

    assert result.is_err()
    assert result.error.code == "FAILED_VALIDATION"
    mock_uow.tokens.get_by_hash.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_password_unknown_token(mock_uow):
    plaintext, _ = generate_token(uuid4(), timedelta(minutes=45), TokenScope.password_reset)

    result = await UpdatePasswordUseCase(mock_uow).execute(plaintext, "n3w-pa55word")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"
    assert mock_uow.tokens.get_by_hash.call_args.args[1] == TokenScope.password_reset
