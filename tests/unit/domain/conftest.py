from unittest.mock import AsyncMock

import pytest

from src.domain.interfaces.repositories import IPasswordResetTokenRepository, IUserRepository
from src.domain.interfaces.services import IPasswordHasher


class MockUnitOfWork:
    """Stands in for ``SqlAlchemyUnitOfWork``; every block shares the same mocks."""

    def __init__(self):
        self.users = AsyncMock(spec=IUserRepository)
        self.reset_tokens = AsyncMock(spec=IPasswordResetTokenRepository)
        self.commit = AsyncMock()
        self.rollback = AsyncMock()
        self.entered = 0

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    def __call__(self):
        return self


@pytest.fixture
def mock_uow():
    return MockUnitOfWork()


@pytest.fixture
def mock_hasher():
    hasher = AsyncMock(spec=IPasswordHasher)
    hasher.hash.return_value = "$2b$04$hashed"
    hasher.verify.return_value = True
    return hasher
