"""
Reset Token Store

Authoritative record of outstanding password reset requests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Union
from uuid import UUID

from src.app.repositories.password_reset_request_repository import (
    IPasswordResetRequestRepository,
)
from src.app.services.token_generator import TokenGenerator
from src.domain.base import normalize_email, utcnow
from src.domain.entities import PasswordResetRequest

RESET_TOKEN_TTL = timedelta(hours=1)


@dataclass(frozen=True)
class Found:
    request: PasswordResetRequest


@dataclass(frozen=True)
class NotFound:
    """Unknown, expired and already-used secrets all look like this."""


NOT_FOUND = NotFound()

LookupResult = Union[Found, NotFound]


class ResetTokenStore:
    """
    Issues, looks up and consumes one-time reset secrets.

    Business Rules:
    - At most one live request per email; issue() replaces older ones
    - Only the SHA-256 fingerprint is persisted, never the secret
    - Requests expire one hour after issue
    - lookup() reports a single NotFound outcome for every failure
    - consume() is a check-and-set: only one caller can win a given request
    """

    def __init__(
        self,
        repository: IPasswordResetRequestRepository,
        token_generator: TokenGenerator,
        clock: Callable[[], datetime] = utcnow,
        ttl: timedelta = RESET_TOKEN_TTL,
    ):
        self.repository = repository
        self.token_generator = token_generator
        self.clock = clock
        self.ttl = ttl

    async def issue(self, email: str) -> str:
        """Replace any request for email with a fresh one; return the raw secret."""
        generated = self.token_generator.generate_secret()
        request = PasswordResetRequest(
            email=normalize_email(email),
            token_hash=generated.fingerprint,
            consumed=False,
            expires_at=self.clock() + self.ttl,
        )
        await self.repository.replace_for_email(request)
        return generated.secret

    async def lookup(self, secret: str) -> LookupResult:
        if not secret:
            return NOT_FOUND

        token_hash = self.token_generator.fingerprint(secret)
        request = await self.repository.get_by_token_hash(token_hash)

        if request is None or request.consumed or request.expires_at <= self.clock():
            return NOT_FOUND
        return Found(request)

    async def consume(self, request_id: UUID) -> bool:
        """
        Mark the request consumed.

        Consuming an already-consumed request is a harmless no-op that
        returns False; True means this call performed the transition.
        """
        return await self.repository.mark_consumed(request_id, self.clock())
