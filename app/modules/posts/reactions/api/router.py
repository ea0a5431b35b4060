from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_actor, get_notification_dispatcher
from app.modules.notifications.services.dispatcher import NotificationDispatcher
from app.modules.user_management.schemas.user import Actor
from app.modules.posts.reactions.schemas.reaction import (
    ReactionToggle, ReactionStatus, ToggleResult, TARGET_KINDS
)
from app.modules.posts.reactions.services.counters import get_target
from app.modules.posts.reactions.services.reaction import ReactionToggleEngine, get_user_reaction
from app.core.exceptions import InvalidInput, NotFound

router = APIRouter()

@router.post("/toggle", response_model=ToggleResult)
def toggle_reaction(
    *,
    db: Session = Depends(get_db),
    reaction_in: ReactionToggle,
    actor: Actor = Depends(get_current_actor),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> Any:
    """Like or dislike a post or comment; repeating the same reaction cancels it"""
    engine = ReactionToggleEngine(db, dispatcher=dispatcher)
    return engine.toggle(actor.id, reaction_in.target_id, reaction_in.target_kind, reaction_in.type)

@router.get("/status", response_model=ReactionStatus)
def read_reaction_status(
    *,
    db: Session = Depends(get_db),
    target_id: str = Query(..., description="ID of the post or comment"),
    target_kind: str = Query(..., description="Post or Comment"),
    actor: Actor = Depends(get_current_actor),
) -> Any:
    """Get the current user's reaction on a target"""
    if target_kind not in TARGET_KINDS:
        raise InvalidInput(f"Target kind must be one of: {', '.join(TARGET_KINDS)}")
    if not get_target(db, target_kind, target_id):
        raise NotFound(f"{target_kind} not found")

    return ReactionStatus(
        target_id=target_id,
        target_kind=target_kind,
        reaction_type=get_user_reaction(db, actor.id, target_id, target_kind),
    )
