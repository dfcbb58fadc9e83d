from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by normalized email address"""
        pass

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account"""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass


class DuplicateAccountError(Exception):
    """Raised by create() when the email is already taken"""
