from typing import List, Optional
from pydantic import BaseModel, field_validator

LIKE = "like"
DISLIKE = "dislike"
REACTION_TYPES = (LIKE, DISLIKE)

TARGET_POST = "Post"
TARGET_COMMENT = "Comment"
TARGET_KINDS = (TARGET_POST, TARGET_COMMENT)

class ReactionToggle(BaseModel):
    target_id: str
    target_kind: str
    type: str = LIKE

    @field_validator("type")
    @classmethod
    def validate_reaction_type(cls, v):
        if v not in REACTION_TYPES:
            raise ValueError(f"Reaction type must be one of: {', '.join(REACTION_TYPES)}")
        return v

    @field_validator("target_kind")
    @classmethod
    def validate_target_kind(cls, v):
        if v not in TARGET_KINDS:
            raise ValueError(f"Target kind must be one of: {', '.join(TARGET_KINDS)}")
        return v

class ToggleResult(BaseModel):
    """Outcome of a toggle: the action taken and the counter deltas applied"""
    action: str
    like_delta: int
    dislike_delta: int

class ReactionStatus(BaseModel):
    target_id: str
    target_kind: str
    reaction_type: Optional[str] = None

class CounterDrift(BaseModel):
    """A target whose cached counters disagree with its reaction rows"""
    target_kind: str
    target_id: str
    stored_likes: int
    stored_dislikes: int
    actual_likes: int
    actual_dislikes: int

class ReconciliationReport(BaseModel):
    checked: int = 0
    drifted: List[CounterDrift] = []
    repaired: int = 0

    @property
    def healthy(self) -> bool:
        return not self.drifted
