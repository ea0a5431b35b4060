from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Integer, JSON, CheckConstraint
from sqlalchemy.sql import func

from app.db.session import Base

class ExpressOrder(Base):
    """Parcel pickup/delivery order with its embedded audit timeline and rating"""
    __tablename__ = "express_orders"

    id = Column(String, primary_key=True, index=True)
    order_number = Column(String, unique=True, index=True, nullable=False)
    customer_id = Column(String, ForeignKey("users.id"), index=True, nullable=False)
    helper_id = Column(String, ForeignKey("users.id"), index=True, nullable=True)  # Set once, on acceptance
    type = Column(String, nullable=False)  # pickup, delivery
    details = Column(JSON, nullable=False, default=dict)
    payment = Column(JSON, nullable=False, default=dict)  # Opaque to the lifecycle
    notes = Column(String(500), default="")
    status = Column(String, nullable=False, default="pending", index=True)
    # Append-only list of {action, timestamp, operator_id, note}
    timeline = Column(JSON, nullable=False, default=list)
    rating_score = Column(Integer, nullable=True)
    rating_comment = Column(Text, nullable=True)
    rated_by = Column(String, ForeignKey("users.id"), nullable=True)
    rated_at = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=False, index=True)
    # Bumped on every write; conditional updates match on it
    version = Column(Integer, nullable=False, default=1, server_default="1")
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'accepted', 'picked', 'delivered', 'completed', 'cancelled')",
            name="valid_order_status",
        ),
        CheckConstraint("rating_score IS NULL OR (rating_score BETWEEN 1 AND 5)", name="valid_rating_score"),
        CheckConstraint("helper_id IS NULL OR helper_id != customer_id", name="no_self_acceptance"),
    )

    @property
    def rating(self):
        if self.rating_score is None:
            return None
        return {
            "score": self.rating_score,
            "comment": self.rating_comment,
            "rated_by": self.rated_by,
            "rated_at": self.rated_at,
        }
