from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetRequest


class IPasswordResetRequestRepository(ABC):
    """PasswordResetRequest repository interface - application layer"""

    @abstractmethod
    async def replace_for_email(self, request: PasswordResetRequest) -> PasswordResetRequest:
        """
        Delete every request for request.email and insert request.

        Must be atomic per email: concurrent callers for the same email
        leave exactly one row, the last writer's. A write that loses to a
        unique constraint raises ResetRequestConflictError and leaves the
        transaction for the caller to roll back.
        """
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetRequest]:
        """Get password reset request by token fingerprint"""
        pass

    @abstractmethod
    async def mark_consumed(self, request_id: UUID, now: datetime) -> bool:
        """
        Set consumed=True if the request is still unconsumed and unexpired.

        Returns True only for the caller whose update flipped the flag.
        """
        pass


class ResetRequestConflictError(Exception):
    """Raised by replace_for_email() when the insert hits a unique constraint"""
