from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import DuplicateAccountError, IAccountRepository
from src.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by normalized email address"""
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateAccountError(account.email) from exc
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update existing account"""
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
