import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_request_repository import (
    IPasswordResetRequestRepository,
    ResetRequestConflictError,
)
from src.domain.entities import PasswordResetRequest

logger = logging.getLogger(__name__)


class PasswordResetRequestRepository(IPasswordResetRequestRepository):
    """PasswordResetRequest repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def replace_for_email(self, request: PasswordResetRequest) -> PasswordResetRequest:
        """
        Delete existing requests for the email, then insert the new one.

        The unique indexes on email and token_hash reject a conflicting
        insert. The session is left as-is; the unit of work owns the
        rollback and the caller decides whether to retry.
        """
        await self.session.execute(
            delete(PasswordResetRequest).where(PasswordResetRequest.email == request.email)
        )
        self.session.add(request)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            logger.warning("Reset request insert for %s hit a unique constraint", request.id)
            raise ResetRequestConflictError(request.email) from exc
        await self.session.refresh(request)
        return request

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetRequest]:
        """Get password reset request by token hash"""
        stmt = select(PasswordResetRequest).where(PasswordResetRequest.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_consumed(self, request_id: UUID, now: datetime) -> bool:
        """Consume the request if it is still live; True only for the winner"""
        stmt = (
            update(PasswordResetRequest)
            .where(
                PasswordResetRequest.id == request_id,
                PasswordResetRequest.consumed == False,  # noqa: E712
                PasswordResetRequest.expires_at > now,
            )
            .values(consumed=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
