"""
User Use Cases

Account-facing business logic outside the auth flows.
"""

from .dtos import ProfileResponse, ProfileView
from .load_profile_use_case import LoadProfileUseCase

__all__ = [
    "LoadProfileUseCase",
    "ProfileResponse",
    "ProfileView",
]
