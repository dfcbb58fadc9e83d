from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.password_reset_request_repository import (
    IPasswordResetRequestRepository,
)


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    password_reset_requests: IPasswordResetRequestRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
