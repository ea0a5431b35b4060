from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Text, JSON
from sqlalchemy.sql import func

from app.db.session import Base

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), index=True)
    actor_id = Column(String, ForeignKey("users.id"), nullable=True)  # The user who triggered the notification
    type = Column(String)  # post_like, comment_like, order_accepted, order_status_update
    title = Column(String(100))
    content = Column(Text)
    data = Column(JSON, default=dict)
    related_id = Column(String, nullable=True)  # ID of the related entity (post, comment, order)
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=func.now())
