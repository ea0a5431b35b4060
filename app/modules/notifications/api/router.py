from typing import Any, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.exceptions import Forbidden, NotFound
from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.notifications.schemas.notification import (
    Notification as NotificationSchema,
    NotificationUpdate
)
from app.modules.notifications.services.notification import (
    get_notification,
    get_user_notifications,
    update_notification,
)

router = APIRouter()

@router.get("", response_model=List[NotificationSchema])
def read_notifications(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    unread_only: bool = False,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get user's notifications, newest first"""
    return get_user_notifications(db, current_user.id, skip, limit, unread_only)

@router.put("/{notification_id}", response_model=NotificationSchema)
def mark_notification_as_read(
    *,
    db: Session = Depends(get_db),
    notification_id: str,
    notification_in: NotificationUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Mark a specific notification as read"""
    notification = get_notification(db, notification_id=notification_id)
    if not notification:
        raise NotFound("Notification not found")

    if notification.user_id != current_user.id:
        raise Forbidden("Not enough permissions")

    return update_notification(db, notification, notification_in)
