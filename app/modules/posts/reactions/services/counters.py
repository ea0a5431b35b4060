"""
Counter aggregator for reaction targets.

Posts and comments cache their like/dislike totals in ``likes`` and
``dislikes``; the reactions table is the source of truth. Every change to
those columns (and to the owner's reputation counters) goes through this
module as a SQL-side increment, so concurrent deltas commute. The
reconciliation helpers recompute the totals from reaction rows and report or
repair drift.
"""
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInput, NotFound
from app.modules.posts.models.post import Post
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.models.reaction import Reaction
from app.modules.posts.reactions.schemas.reaction import (
    CounterDrift, ReconciliationReport, LIKE, DISLIKE, TARGET_POST, TARGET_COMMENT, TARGET_KINDS
)
from app.modules.user_management.models.user import User

logger = logging.getLogger(__name__)

TARGET_MODELS = {
    TARGET_POST: Post,
    TARGET_COMMENT: Comment,
}

def target_model(target_kind: str):
    """Map a target kind to its ORM model"""
    model = TARGET_MODELS.get(target_kind)
    if model is None:
        raise InvalidInput(f"Target kind must be one of: {', '.join(TARGET_KINDS)}")
    return model

def get_target(db: Session, target_kind: str, target_id: str):
    """Get a post or comment by kind and ID"""
    model = target_model(target_kind)
    return db.query(model).filter(model.id == target_id).first()

def apply_reaction_deltas(db: Session, target_kind: str, target_id: str, like_delta: int, dislike_delta: int) -> None:
    """Increment a target's counters in place; the caller owns the transaction"""
    if not like_delta and not dislike_delta:
        return

    model = target_model(target_kind)
    values = {}
    if like_delta:
        values[model.likes] = model.likes + like_delta
    if dislike_delta:
        values[model.dislikes] = model.dislikes + dislike_delta

    updated = (
        db.query(model)
        .filter(model.id == target_id)
        .update(values, synchronize_session=False)
    )
    if not updated:
        raise NotFound(f"{target_kind} not found")

def adjust_reputation(db: Session, user_id: str, delta: int) -> None:
    """Move a target owner's reputation and likes-received counters by delta"""
    if not delta:
        return

    updated = (
        db.query(User)
        .filter(User.id == user_id)
        .update(
            {
                User.reputation: User.reputation + delta,
                User.likes_received: User.likes_received + delta,
            },
            synchronize_session=False,
        )
    )
    if not updated:
        logger.warning(f"Reputation change of {delta} skipped, user {user_id} not found")

def _reaction_count(model, target_kind: str, reaction_type: str):
    """Correlated count of one reaction type on the enclosing target row"""
    return (
        select(func.count(Reaction.id))
        .where(
            Reaction.target_id == model.id,
            Reaction.target_type == target_kind,
            Reaction.reaction_type == reaction_type,
        )
        .correlate(model)
        .scalar_subquery()
    )

def _kinds(target_kind: Optional[str]) -> Iterable[str]:
    if target_kind is None:
        return TARGET_KINDS
    target_model(target_kind)
    return (target_kind,)

def _scan(db: Session, target_kind: Optional[str]) -> Tuple[int, List[CounterDrift]]:
    # Stored and recomputed values come from the same statement, so they share one snapshot
    checked = 0
    drifted = []
    for kind in _kinds(target_kind):
        model = TARGET_MODELS[kind]
        rows = db.query(
            model.id,
            model.likes,
            model.dislikes,
            _reaction_count(model, kind, LIKE),
            _reaction_count(model, kind, DISLIKE),
        )
        for target_id, stored_likes, stored_dislikes, actual_likes, actual_dislikes in rows:
            checked += 1
            if (stored_likes, stored_dislikes) != (actual_likes, actual_dislikes):
                drifted.append(CounterDrift(
                    target_kind=kind,
                    target_id=target_id,
                    stored_likes=stored_likes,
                    stored_dislikes=stored_dislikes,
                    actual_likes=actual_likes,
                    actual_dislikes=actual_dislikes,
                ))
    return checked, drifted

def find_counter_drift(db: Session, target_kind: Optional[str] = None) -> List[CounterDrift]:
    """List every target whose cached counters differ from its reaction rows"""
    return _scan(db, target_kind)[1]

def repair_target_counters(db: Session, target_kind: str, target_id: str) -> bool:
    """
    Rewrite one target's counters from its reaction rows and commit.

    The target row is locked first; toggles in flight either committed
    before the lock (and are counted) or apply their increment after this
    commit, on top of the recomputed value.
    """
    model = target_model(target_kind)
    locked = db.query(model.id).filter(model.id == target_id).with_for_update().first()
    if locked is None:
        db.rollback()
        return False

    db.query(model).filter(model.id == target_id).update(
        {
            model.likes: _reaction_count(model, target_kind, LIKE),
            model.dislikes: _reaction_count(model, target_kind, DISLIKE),
        },
        synchronize_session=False,
    )
    db.commit()
    return True

def reconcile_counters(db: Session, target_kind: Optional[str] = None, repair: bool = False) -> ReconciliationReport:
    """
    Health check over cached reaction counters.

    With ``repair`` every drifting target is recounted inside its own
    UPDATE, never from the values seen during the scan.
    """
    checked, drifted = _scan(db, target_kind)
    report = ReconciliationReport(checked=checked, drifted=drifted)

    for drift in drifted:
        logger.warning(
            f"Counter drift on {drift.target_kind} {drift.target_id}: "
            f"stored {drift.stored_likes}/{drift.stored_dislikes}, "
            f"actual {drift.actual_likes}/{drift.actual_dislikes}"
        )

    if not repair or not drifted:
        return report

    for drift in drifted:
        if repair_target_counters(db, drift.target_kind, drift.target_id):
            report.repaired += 1
        else:
            logger.info(f"{drift.target_kind} {drift.target_id} was deleted during reconciliation, skipped")

    logger.info(f"Reconciliation repaired {report.repaired} of {len(drifted)} drifted targets")
    return report
