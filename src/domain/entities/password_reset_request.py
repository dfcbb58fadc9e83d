"""
PasswordResetRequest Entity

Outstanding one-time password reset requests.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class PasswordResetRequest(SQLModel, table=True):
    """
    PasswordResetRequest entity - one row per email at most.

    Business Rules:
    - Expires one hour after issue
    - token_hash is the SHA-256 fingerprint of the secret; the secret is never stored
    - Unique on email: issuing a new request replaces the previous one
    - Single-use: once consumed the row is inert, whatever its expiry
    """

    __tablename__ = "password_reset_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(unique=True, index=True, max_length=255)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 hex output

    consumed: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_request_expires_at", "expires_at"),)
