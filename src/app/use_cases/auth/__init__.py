"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .verify_reset_token_use_case import VerifyResetTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    RegisterCommand,
    AccountInfo,
    AuthResponse,
    ForgotPasswordResponse,
    VerifyResetTokenResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "ForgotPasswordUseCase",
    "VerifyResetTokenUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthResponse",
    "ForgotPasswordResponse",
    "VerifyResetTokenResponse",
    "ResetPasswordResponse",
    # DTOs - Nested Models
    "AccountInfo",
]
