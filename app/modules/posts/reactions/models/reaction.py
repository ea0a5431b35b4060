from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Index, CheckConstraint
from sqlalchemy.sql import func

from app.db.session import Base

class Reaction(Base):
    __tablename__ = "reactions"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    target_id = Column(String, nullable=False)
    target_type = Column(String, nullable=False)  # Post, Comment
    reaction_type = Column(String, nullable=False)  # like, dislike
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        # One reaction per user per target; a racing duplicate insert fails here
        UniqueConstraint("user_id", "target_id", "target_type", name="unique_user_reaction"),
        Index("ix_reactions_target", "target_id", "target_type"),
        CheckConstraint("reaction_type IN ('like', 'dislike')", name="valid_reaction_type"),
        CheckConstraint("target_type IN ('Post', 'Comment')", name="valid_reaction_target"),
    )
