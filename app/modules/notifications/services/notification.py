from typing import List, Optional
import uuid
from sqlalchemy.orm import Session

from app.modules.notifications.models.notification import Notification
from app.modules.notifications.schemas.notification import NotificationCreate, NotificationUpdate

def get_notification(db: Session, notification_id: str) -> Optional[Notification]:
    """Get notification by ID"""
    return db.query(Notification).filter(Notification.id == notification_id).first()

def get_user_notifications(db: Session, user_id: str, skip: int = 0, limit: int = 50, unread_only: bool = False) -> List[Notification]:
    """Get notifications for a user, newest first"""
    query = db.query(Notification).filter(Notification.user_id == user_id)

    if unread_only:
        query = query.filter(Notification.is_read == False)

    return query.order_by(Notification.created_at.desc()).offset(skip).limit(limit).all()

def create_notification(db: Session, notification_in: NotificationCreate) -> Notification:
    """Create a new notification"""
    notification = Notification(
        id=str(uuid.uuid4()),
        **notification_in.model_dump(),
    )

    db.add(notification)
    db.commit()
    db.refresh(notification)

    return notification

def update_notification(db: Session, notification: Notification, notification_in: NotificationUpdate) -> Notification:
    """Update a notification"""
    notification.is_read = notification_in.is_read

    db.add(notification)
    db.commit()
    db.refresh(notification)

    return notification
