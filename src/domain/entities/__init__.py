"""
Domain Entities

Each entity in its own file.
"""

from .enums import AccountRole

from .account import Account
from .password_reset_request import PasswordResetRequest

__all__ = [
    # Enums
    "AccountRole",
    # Entities
    "Account",
    "PasswordResetRequest",
]
