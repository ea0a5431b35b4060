from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core import security
from app.core.config import settings
from app.db.session import get_db, SessionLocal
from app.modules.auth.schemas.auth import TokenPayload
from app.modules.notifications.services.dispatcher import DatabaseNotificationDispatcher, NotificationDispatcher
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import Actor
from app.modules.user_management.services.user import get_user, actor_for_user

# OAuth2 token URL
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    """
    Dependency for getting current authenticated user
    """
    token_data = TokenPayload(sub=security.verify_access_token(token))
    if not token_data.sub:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )

    user = get_user(db, user_id=token_data.sub)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )

    return user

def get_current_actor(current_user: User = Depends(get_current_user)) -> Actor:
    """
    Dependency resolving the authenticated user into the (id, role) pair
    the reaction and order services trust
    """
    return actor_for_user(current_user)

def get_notification_dispatcher() -> NotificationDispatcher:
    """
    Dependency providing the notification capability injected into services
    """
    return DatabaseNotificationDispatcher(SessionLocal)
