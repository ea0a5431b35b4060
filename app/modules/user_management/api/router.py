from typing import Any

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import User as UserSchema
from app.modules.user_management.services.user import get_user_by_username

router = APIRouter()

@router.get("/me", response_model=UserSchema)
def read_user_me(
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get current user, including reputation counters"""
    return current_user

@router.get("/{username}", response_model=UserSchema)
def read_user_by_username(
    *,
    db: Session = Depends(get_db),
    username: str = Path(..., description="Username of the user to fetch"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get a user's public profile by username"""
    user = get_user_by_username(db, username=username)
    if not user:
        raise NotFound("User not found")
    return user
