"""
Forgot Password Use Case

Issues a one-time reset secret and delivers the reset link.
"""

import asyncio
import logging
from typing import Optional, Tuple
from urllib.parse import quote

from src.app.repositories.password_reset_request_repository import ResetRequestConflictError
from src.app.services.notification_sender import INotificationSender
from src.app.services.reset_token_store import ResetTokenStore
from src.app.services.token_generator import TokenGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import normalize_email
from src.libs.result import Result, Return
from .dtos import ForgotPasswordResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If an account exists for this email, a password reset link has been sent"

# Lookup-and-issue attempts before a unique-constraint conflict is surfaced
MAX_ISSUE_ATTEMPTS = 3


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Same response for registered and unregistered emails (no enumeration)
    - A token is only issued when the account exists
    - Issuing replaces any earlier request for the email
    - Delivery is awaited with a bounded timeout; failure or timeout still
      yields the generic response
    - The raw link is returned only when dev_mode is on AND no notification
      channel is configured
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationSender,
        token_generator: TokenGenerator,
        frontend_url: str,
        dev_mode: bool = False,
        notification_timeout: float = 10.0,
    ):
        self.uow = uow
        self.notifier = notifier
        self.token_generator = token_generator
        self.frontend_url = frontend_url.rstrip("/")
        self.dev_mode = dev_mode
        self.notification_timeout = notification_timeout

    def build_reset_link(self, secret: str) -> str:
        return f"{self.frontend_url}/reset-password?token={quote(secret)}"

    @staticmethod
    def _generic_response() -> ForgotPasswordResponse:
        return ForgotPasswordResponse(status="sent", message=GENERIC_MESSAGE)

    async def execute(self, email: str) -> Result[ForgotPasswordResponse]:
        """
        Execute forgot password use case.

        Args:
            email: Email address the reset was requested for

        Returns:
            Result with the generic response (plus reset_link in the
            development fallback)
        """
        issued = await self._issue(normalize_email(email))
        if issued is None:
            return Return.ok(self._generic_response())

        account_id, account_email, secret = issued
        link = self.build_reset_link(secret)

        if not self.notifier.is_configured():
            if self.dev_mode:
                logger.warning(
                    "Notification channel not configured; returning reset link in response (dev mode)"
                )
                response = self._generic_response()
                response.reset_link = link
                return Return.ok(response)

            logger.error(
                "Notification channel not configured; password reset link for account %s was not delivered",
                account_id,
            )
            return Return.ok(self._generic_response())

        await self._deliver(account_email, link, account_id=account_id)
        return Return.ok(self._generic_response())

    async def _issue(self, email: str) -> Optional[Tuple[str, str, str]]:
        """
        Issue a reset secret for the account owning email.

        Returns (account_id, account_email, secret), or None when no account
        exists. A conflicting concurrent write rolls the unit of work back
        and the whole lookup-and-issue is retried with a fresh secret.
        """
        for attempt in range(1, MAX_ISSUE_ATTEMPTS + 1):
            async with self.uow:
                account = await self.uow.accounts.get_by_email(email)
                if account is None:
                    return None
                account_id, account_email = str(account.id), account.email

                store = ResetTokenStore(self.uow.password_reset_requests, self.token_generator)
                try:
                    secret = await store.issue(account_email)
                except ResetRequestConflictError:
                    if attempt == MAX_ISSUE_ATTEMPTS:
                        raise
                    logger.warning(
                        "Reset request for account %s conflicted, retrying (attempt %d)",
                        account_id,
                        attempt,
                    )
                    continue

                await self.uow.commit()
                return account_id, account_email, secret

    async def _deliver(self, email: str, link: str, account_id: str) -> None:
        try:
            delivered = await asyncio.wait_for(
                self.notifier.send_password_reset(email, link),
                timeout=self.notification_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Password reset delivery for account %s timed out after %ss",
                account_id,
                self.notification_timeout,
            )
            return
        except Exception:
            logger.exception("Password reset delivery for account %s failed", account_id)
            return

        if not delivered:
            logger.error("Password reset delivery for account %s was rejected", account_id)
