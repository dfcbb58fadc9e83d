"""
Auth error catalogue.

The messages for INVALID_CREDENTIALS and INVALID_TOKEN are deliberately
generic: they are returned unchanged for every underlying cause.
"""

from src.libs.result import Error

MIN_PASSWORD_LENGTH = 6

EMAIL_ALREADY_EXISTS = Error("EMAIL_ALREADY_EXISTS", "Email already registered")
INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")
INVALID_TOKEN = Error("INVALID_TOKEN", "Invalid or expired password reset token")
INVALID_PASSWORD = Error(
    "INVALID_PASSWORD",
    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
)
