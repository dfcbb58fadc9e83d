"""
Verify Reset Token Use Case

Read-only check that a reset secret is still usable.
"""

from src.app.services.reset_token_store import Found, ResetTokenStore
from src.app.services.token_generator import TokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Result, Return
from .dtos import VerifyResetTokenResponse
from .errors import INVALID_TOKEN


class VerifyResetTokenUseCase:
    """
    Pre-check for the reset form: is this secret live?

    Unknown, expired and already-used secrets share one error.
    """

    def __init__(self, uow: UnitOfWork, token_generator: TokenGenerator):
        self.uow = uow
        self.token_generator = token_generator

    async def execute(self, token: str) -> Result[VerifyResetTokenResponse]:
        async with self.uow:
            store = ResetTokenStore(self.uow.password_reset_requests, self.token_generator)
            outcome = await store.lookup(token)

            if not isinstance(outcome, Found):
                return Return.err(INVALID_TOKEN)

            return Return.ok(VerifyResetTokenResponse(valid=True, email=outcome.request.email))
