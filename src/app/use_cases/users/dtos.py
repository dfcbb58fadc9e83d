from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProfileView(BaseModel):
    """Public account view - never includes password_hash"""

    id: str
    email: str
    name: Optional[str] = None
    role: str
    created_at: datetime


class ProfileResponse(BaseModel):
    """GET /me response payload"""

    user: ProfileView
