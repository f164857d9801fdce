import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.token_issuer import TokenIssuer


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_username = AsyncMock()
    uow.accounts.get_by_identity = AsyncMock()

    uow.credentials = MagicMock()
    uow.credentials.get_by_account_id = AsyncMock()
    uow.credentials.replace = AsyncMock(return_value=1)
    return uow


@pytest.fixture
def mock_token_issuer():
    issuer = MagicMock(spec=TokenIssuer)
    issuer.issue.return_value = "signed.reset.token"
    return issuer
