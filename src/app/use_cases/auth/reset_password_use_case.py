"""
Reset Password Use Case

Consumes a one-time reset secret and replaces the account credential.
"""

import logging

from src.app.services.credential_hasher import CredentialHasher
from src.app.services.reset_token_store import Found, ResetTokenStore
from src.app.services.token_generator import TokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Result, Return
from .dtos import ResetPasswordResponse
from .errors import INVALID_PASSWORD, INVALID_TOKEN, MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - New password must be at least 6 characters (checked before any lookup)
    - Unknown, expired and used secrets all fail with INVALID_TOKEN
    - The consume step is a conditional update; of two concurrent resets
      with the same secret only one can succeed
    - Consume and credential update commit together: if either fails the
      token stays unconsumed and can be retried
    - Hashing happens before any write so no lock is held across it
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        token_generator: TokenGenerator,
    ):
        self.uow = uow
        self.hasher = hasher
        self.token_generator = token_generator

    async def execute(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            token: Raw reset secret from the emailed link
            new_password: New password to set

        Returns:
            Result with confirmation, or Error

        Errors:
            - INVALID_PASSWORD: Password too short
            - INVALID_TOKEN: Secret unknown, expired, already used, or lost a race
        """
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return Return.err(INVALID_PASSWORD)

        async with self.uow:
            store = ResetTokenStore(self.uow.password_reset_requests, self.token_generator)

            outcome = await store.lookup(token)
            if not isinstance(outcome, Found):
                return Return.err(INVALID_TOKEN)
            request = outcome.request

            account = await self.uow.accounts.get_by_email(request.email)
            if account is None:
                logger.warning("Reset request %s has no matching account", request.id)
                return Return.err(INVALID_TOKEN)

            password_hash = await self.hasher.hash(new_password)

            if not await store.consume(request.id):
                # Another request consumed this token first
                return Return.err(INVALID_TOKEN)

            account.password_hash = password_hash
            account.updated_at = utcnow()
            await self.uow.accounts.update(account)

            await self.uow.commit()

            logger.info("Password reset completed for account %s", account.id)

        return Return.ok(
            ResetPasswordResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )
