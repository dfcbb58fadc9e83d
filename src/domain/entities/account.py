"""
Account Entity

A registered person who can sign in to the review service.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow

from .enums import AccountRole


class Account(SQLModel, table=True):
    """
    Account entity - identity plus stored credential.

    Business Rules:
    - Email is unique across all accounts (stored normalized)
    - Password stored as bcrypt hash, never plaintext
    - password_hash is only changed by a password reset
    - Accounts are never deleted by the auth core
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    name: Optional[str] = Field(default=None, max_length=255)
    role: AccountRole = Field(default=AccountRole.user)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
