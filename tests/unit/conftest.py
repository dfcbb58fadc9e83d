import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.background_tasks import BackgroundTaskRunner
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.session_issuer import SessionIssuer
from src.app.services.token_generator import TokenGenerator


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with both repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)

    uow.password_reset_requests = MagicMock()
    uow.password_reset_requests.replace_for_email = AsyncMock(side_effect=lambda request: request)
    uow.password_reset_requests.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_requests.mark_consumed = AsyncMock(return_value=True)

    return uow


@pytest.fixture(scope="session")
def hasher():
    # Lowest bcrypt cost keeps the suite fast
    return CredentialHasher(rounds=4)


@pytest.fixture
def session_issuer():
    return SessionIssuer("unit-test-secret")


@pytest.fixture
def token_generator():
    return TokenGenerator()


@pytest.fixture
def background():
    return BackgroundTaskRunner()
