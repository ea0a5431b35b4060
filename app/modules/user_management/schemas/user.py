from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

ROLE_USER = "user"
ROLE_ADMIN = "admin"

class UserBase(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    university: Optional[str] = None

class User(UserBase):
    """User model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    is_active: bool
    reputation: int = 0
    likes_received: int = 0
    created_at: Optional[datetime] = None

class Actor(BaseModel):
    """Authenticated identity handed to the reaction and order services"""
    id: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
