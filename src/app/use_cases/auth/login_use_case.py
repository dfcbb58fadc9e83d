"""
Login Use Case

Authenticates an account and issues a session credential.
"""

from src.app.services.credential_hasher import CredentialHasher
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.libs.result import Result, Return
from .dtos import AccountInfo, AuthResponse
from .errors import INVALID_CREDENTIALS


class LoginUseCase:
    """
    Use case for login and session issuance.

    Business Rules:
    - Unknown email and wrong password return the same error object
    - A bcrypt comparison runs on both paths so timing matches too
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        session_issuer: SessionIssuer,
    ):
        self.uow = uow
        self.hasher = hasher
        self.session_issuer = session_issuer

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: Account email
            password: Plain text password

        Returns:
            Result with AuthResponse, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))

            if account is None:
                await self.hasher.verify_dummy(password)
                return Return.err(INVALID_CREDENTIALS)

            if not await self.hasher.verify(password, account.password_hash):
                return Return.err(INVALID_CREDENTIALS)

            # Build the response before the unit of work releases the row
            return Return.ok(
                AuthResponse(
                    token=self.session_issuer.issue(account.id),
                    user=AccountInfo(
                        id=str(account.id),
                        email=account.email,
                        name=account.name,
                        role=account.role.value,
                    ),
                )
            )
