"""
Load Profile Use Case

Loads the signed-in account's public profile.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .dtos import ProfileResponse, ProfileView


class LoadProfileUseCase:
    """
    Use case for loading the current account.

    Business Rules:
    - Account id comes from a verified session credential
    - The account may have vanished since the credential was issued
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[ProfileResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)

            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            return Return.ok(
                ProfileResponse(
                    user=ProfileView(
                        id=str(account.id),
                        email=account.email,
                        name=account.name,
                        role=account.role.value,
                        created_at=account.created_at,
                    )
                )
            )
