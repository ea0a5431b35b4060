from typing import Optional
from sqlalchemy.orm import Session

from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import Actor, ROLE_ADMIN, ROLE_USER

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get user by username"""
    return db.query(User).filter(User.username == username).first()

def actor_for_user(user: User) -> Actor:
    """Resolve the identity and role the core services trust"""
    return Actor(id=user.id, role=ROLE_ADMIN if user.is_admin else ROLE_USER)
