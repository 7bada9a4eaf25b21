import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update_if_version = AsyncMock()

    uow.tokens = MagicMock()
    uow.tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.tokens.get_by_hash = AsyncMock(return_value=None)
    uow.tokens.delete_all_for_user = AsyncMock(return_value=1)

    uow.permissions = MagicMock()
    uow.permissions.get_all_for_user = AsyncMock(return_value=frozenset())
    uow.permissions.add_for_user = AsyncMock()

    uow.movies = MagicMock()
    uow.movies.get_by_id = AsyncMock(return_value=None)
    uow.movies.create = AsyncMock()
    uow.movies.list = AsyncMock(return_value=([], 0))
    uow.movies.update_if_version = AsyncMock()
    uow.movies.delete = AsyncMock(return_value=True)
    return uow
