"""
Session Issuer

Mints and verifies signed, time-limited session credentials (JWT, HS256).
"""

from datetime import UTC, datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from jose import JWTError, jwt

ALGORITHM = "HS256"


class SessionIssuer:
    """
    Stateless session credentials.

    Validity is decided by signature and expiry alone. Rotating the
    signing secret invalidates every credential issued before.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        if not secret:
            raise ValueError("Session signing secret must not be empty")
        self._secret = secret
        self.expires_in = expires_in
        self.clock = clock

    def issue(self, account_id: UUID) -> str:
        """
        Issue a session credential

        Args:
            account_id: Account UUID

        Returns:
            JWT string carrying sub, iat and exp claims
        """
        now = self.clock()
        payload = {
            "sub": str(account_id),
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[str]:
        """
        Verify a session credential

        Args:
            token: JWT string

        Returns:
            Account id as string, or None for any invalid credential
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError:
            return None

        subject = payload.get("sub")
        if not isinstance(subject, str):
            return None
        try:
            UUID(subject)
        except ValueError:
            return None
        return subject
