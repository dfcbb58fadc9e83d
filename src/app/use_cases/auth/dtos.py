"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the auth domain.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Commands
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - validated registration intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    name: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public view of an account; never carries the credential hash"""

    id: str
    email: str
    name: Optional[str] = None
    role: str


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    token: str
    user: AccountInfo


class ForgotPasswordResponse(BaseModel):
    """Response for forgot password use case

    reset_link is only set in development mode when no notification
    channel is configured.
    """

    status: str
    message: str
    reset_link: Optional[str] = None


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    valid: bool
    email: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
