import logging

from src.app.repositories.account_repository import DuplicateAccountError
from src.app.services.background_tasks import BackgroundTaskRunner
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.notification_sender import INotificationSender
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.domain.entities import Account
from src.libs.result import Result, Return
from .dtos import AccountInfo, AuthResponse, RegisterCommand
from .errors import EMAIL_ALREADY_EXISTS, INVALID_PASSWORD, MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject an email that already owns an account
    2. Hash password with bcrypt
    3. Create Account and commit
    4. Queue the welcome notification without waiting for it
    5. Issue a session credential

    Registration is not enumeration-sensitive: a taken email is reported
    as such.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: CredentialHasher,
        session_issuer: SessionIssuer,
        notifier: INotificationSender,
        background: BackgroundTaskRunner,
    ):
        self.uow = uow
        self.hasher = hasher
        self.session_issuer = session_issuer
        self.notifier = notifier
        self.background = background

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, password and optional name

        Returns:
            Result[AuthResponse] with session credential and public account view,
            or Error(EMAIL_ALREADY_EXISTS)
        """
        if len(command.password) < MIN_PASSWORD_LENGTH:
            return Return.err(INVALID_PASSWORD)

        email = normalize_email(command.email)
        name = (command.name or "").strip() or None

        async with self.uow:
            existing = await self.uow.accounts.get_by_email(email)
            if existing:
                return Return.err(EMAIL_ALREADY_EXISTS)

            password_hash = await self.hasher.hash(command.password)

            account = Account(email=email, password_hash=password_hash, name=name)
            try:
                account = await self.uow.accounts.create(account)
            except DuplicateAccountError:
                # Lost a race with a concurrent registration for the same email
                return Return.err(EMAIL_ALREADY_EXISTS)
            await self.uow.commit()

            logger.info("Account registered: %s", account.id)

            self.background.submit(
                self.notifier.send_welcome(account.email, account.name or account.email),
                name=f"welcome-{account.id}",
            )

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
