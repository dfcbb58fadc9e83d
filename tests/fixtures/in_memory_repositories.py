from datetime import datetime
from typing import Dict, Optional
from uuid import UUID

from src.app.repositories.password_reset_request_repository import (
    IPasswordResetRequestRepository,
)
from src.domain.entities import PasswordResetRequest


class InMemoryPasswordResetRequestRepository(IPasswordResetRequestRepository):
    """Dict-backed repository; each method body runs without awaiting, so it is atomic on the event loop"""

    def __init__(self):
        self.rows: Dict[UUID, PasswordResetRequest] = {}

    async def replace_for_email(self, request: PasswordResetRequest) -> PasswordResetRequest:
        self.rows = {k: v for k, v in self.rows.items() if v.email != request.email}
        self.rows[request.id] = request
        return request

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetRequest]:
        for row in self.rows.values():
            if row.token_hash == token_hash:
                return row
        return None

    async def mark_consumed(self, request_id: UUID, now: datetime) -> bool:
        row = self.rows.get(request_id)
        if row is None or row.consumed or row.expires_at <= now:
            return False
        row.consumed = True
        return True
