from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

class NotificationMessage(BaseModel):
    """Payload handed to a notification dispatcher"""
    type: str
    title: str = Field(..., max_length=100)
    content: str = Field(..., max_length=500)
    data: Dict[str, Any] = {}

class NotificationCreate(NotificationMessage):
    user_id: str
    actor_id: Optional[str] = None  # ID of the user who triggered the notification
    related_id: Optional[str] = None

class NotificationUpdate(BaseModel):
    is_read: bool = True

class Notification(BaseModel):
    """Notification model returned to client"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    actor_id: Optional[str] = None
    type: str
    title: Optional[str] = None
    content: str
    data: Dict[str, Any] = {}
    related_id: Optional[str] = None
    is_read: bool
    created_at: datetime
