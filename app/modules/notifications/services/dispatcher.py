"""
Notification dispatch for the reaction and order services.

Services receive a dispatcher at construction time and call it only after
their own transaction has committed. Dispatch is best-effort: a failure is
logged and never reaches the caller or undoes the committed change.
"""
from typing import Callable, Protocol
import logging

from sqlalchemy.orm import Session

from app.modules.notifications.schemas.notification import NotificationCreate, NotificationMessage
from app.modules.notifications.services.notification import create_notification

logger = logging.getLogger(__name__)

class NotificationDispatcher(Protocol):
    def notify(self, user_id: str, message: NotificationMessage) -> None: ...

class DatabaseNotificationDispatcher:
    """Stores notifications in their own session, apart from the caller's transaction"""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def notify(self, user_id: str, message: NotificationMessage) -> None:
        db = self.session_factory()
        try:
            data = dict(message.data)
            create_notification(db, NotificationCreate(
                user_id=user_id,
                actor_id=data.get("actor_id"),
                related_id=data.get("order_id") or data.get("target_id"),
                **message.model_dump(),
            ))
            logger.info(f"Created {message.type} notification for user {user_id}")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

def notify_safely(dispatcher: NotificationDispatcher, user_id: str, message: NotificationMessage) -> bool:
    """Dispatch a notification, logging instead of raising on failure"""
    try:
        dispatcher.notify(user_id, message)
        return True
    except Exception as e:
        logger.error(f"Error sending {message.type} notification to user {user_id}: {e}")
        return False
