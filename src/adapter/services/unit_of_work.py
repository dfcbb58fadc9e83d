from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.password_reset_request_repository import (
    PasswordResetRequestRepository,
)
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.password_reset_requests = PasswordResetRequestRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
