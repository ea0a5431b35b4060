"""
Reaction toggle engine for posts and comments.

A toggle reads the user's current reaction on a target, decides what to do
with it (create, cancel or switch), writes the reaction row and applies the
matching counter deltas, all inside one transaction. Losing a race to a
concurrent toggle by the same user shows up either as a unique-constraint
violation on insert or as a conditional delete/update that matches no rows;
both roll back and re-run the whole step.
"""
from typing import Optional, Tuple
import logging
import uuid

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import CampusCrushError, Conflict, InvalidInput, NotFound
from app.modules.notifications.schemas.notification import NotificationMessage
from app.modules.notifications.services.dispatcher import NotificationDispatcher, notify_safely
from app.modules.posts.reactions.models.reaction import Reaction
from app.modules.posts.reactions.schemas.reaction import (
    ToggleResult, LIKE, REACTION_TYPES, TARGET_KINDS, TARGET_POST
)
from app.modules.posts.reactions.services.counters import (
    apply_reaction_deltas, adjust_reputation, get_target
)
from app.modules.user_management.services.user import get_user

logger = logging.getLogger(__name__)

def get_reaction(db: Session, user_id: str, target_id: str, target_kind: str) -> Optional[Reaction]:
    """Get reaction by user, target ID and target kind"""
    return (
        db.query(Reaction)
        .filter(
            Reaction.user_id == user_id,
            Reaction.target_id == target_id,
            Reaction.target_type == target_kind,
        )
        .first()
    )

def get_user_reaction(db: Session, user_id: str, target_id: str, target_kind: str) -> Optional[str]:
    """Current reaction type of a user on a target, or None"""
    reaction = get_reaction(db, user_id, target_id, target_kind)
    return reaction.reaction_type if reaction else None

def _deltas(reaction_type: str, amount: int) -> Tuple[int, int]:
    return (amount, 0) if reaction_type == LIKE else (0, amount)

class ReactionToggleEngine:
    """Sole writer of reaction rows and, through the counter aggregator, of target counters"""

    def __init__(self, db: Session, dispatcher: Optional[NotificationDispatcher] = None, max_retries: Optional[int] = None):
        self.db = db
        self.dispatcher = dispatcher
        self.max_retries = settings.CONFLICT_MAX_RETRIES if max_retries is None else max_retries

    def toggle(self, user_id: str, target_id: str, target_kind: str, requested_type: str) -> ToggleResult:
        if requested_type not in REACTION_TYPES:
            raise InvalidInput(f"Reaction type must be one of: {', '.join(REACTION_TYPES)}")
        if target_kind not in TARGET_KINDS:
            raise InvalidInput(f"Target kind must be one of: {', '.join(TARGET_KINDS)}")

        for attempt in range(self.max_retries + 1):
            try:
                result, owner_id = self._apply(user_id, target_id, target_kind, requested_type)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                # Only a competing row for the same (user, target) is a lost race
                if get_reaction(self.db, user_id, target_id, target_kind) is None:
                    logger.error(f"Reaction toggle by {user_id} on {target_kind} {target_id} violated a constraint: {e.orig}")
                    raise
                logger.warning(
                    f"Reaction toggle by {user_id} on {target_kind} {target_id} lost an insert race "
                    f"(attempt {attempt + 1})"
                )
                continue
            except Conflict as e:
                self.db.rollback()
                logger.warning(
                    f"Reaction toggle by {user_id} on {target_kind} {target_id} lost a race "
                    f"(attempt {attempt + 1}): {e.__class__.__name__}"
                )
                continue
            except CampusCrushError:
                self.db.rollback()
                raise
            except Exception:
                self.db.rollback()
                logger.error(f"Reaction toggle by {user_id} on {target_kind} {target_id} failed", exc_info=True)
                raise

            logger.info(
                f"User {user_id} {result.action} on {target_kind} {target_id} "
                f"(likes {result.like_delta:+d}, dislikes {result.dislike_delta:+d})"
            )
            if result.action == LIKE and owner_id and owner_id != user_id:
                self._notify_like(user_id, owner_id, target_id, target_kind)
            return result

        raise Conflict(f"Could not apply reaction on {target_kind} {target_id}, please retry")

    def _apply(self, user_id: str, target_id: str, target_kind: str, requested_type: str) -> Tuple[ToggleResult, Optional[str]]:
        """One read-decide-write step; flushes but does not commit"""
        db = self.db
        target = get_target(db, target_kind, target_id)
        if not target:
            raise NotFound(f"{target_kind} not found")

        existing = self._current_reaction(user_id, target_id, target_kind)

        if existing is None:
            db.add(Reaction(
                id=str(uuid.uuid4()),
                user_id=user_id,
                target_id=target_id,
                target_type=target_kind,
                reaction_type=requested_type,
            ))
            db.flush()
            action = requested_type
            like_delta, dislike_delta = _deltas(requested_type, 1)
        elif existing.reaction_type == requested_type:
            deleted = (
                db.query(Reaction)
                .filter(Reaction.id == existing.id, Reaction.reaction_type == requested_type)
                .delete(synchronize_session=False)
            )
            if not deleted:
                raise Conflict("Reaction changed concurrently")
            action = f"cancel_{requested_type}"
            like_delta, dislike_delta = _deltas(requested_type, -1)
        else:
            previous_type = existing.reaction_type
            updated = (
                db.query(Reaction)
                .filter(Reaction.id == existing.id, Reaction.reaction_type == previous_type)
                .update({Reaction.reaction_type: requested_type, Reaction.updated_at: func.now()}, synchronize_session=False)
            )
            if not updated:
                raise Conflict("Reaction changed concurrently")
            action = f"switch_to_{requested_type}"
            like_delta = 1 if requested_type == LIKE else -1
            dislike_delta = -like_delta

        apply_reaction_deltas(db, target_kind, target_id, like_delta, dislike_delta)

        # Reputation follows the net creation and cancellation of likes only
        if action == LIKE:
            adjust_reputation(db, target.author_id, 1)
        elif action == f"cancel_{LIKE}":
            adjust_reputation(db, target.author_id, -1)

        return ToggleResult(action=action, like_delta=like_delta, dislike_delta=dislike_delta), target.author_id

    def _current_reaction(self, user_id: str, target_id: str, target_kind: str) -> Optional[Reaction]:
        return (
            self.db.query(Reaction)
            .filter(
                Reaction.user_id == user_id,
                Reaction.target_id == target_id,
                Reaction.target_type == target_kind,
            )
            .with_for_update()
            .first()
        )

    def _notify_like(self, liker_id: str, owner_id: str, target_id: str, target_kind: str) -> None:
        if self.dispatcher is None:
            return

        try:
            liker = get_user(self.db, liker_id)
        except SQLAlchemyError as e:
            logger.error(f"Could not load user {liker_id} for like notification: {e}")
            liker = None
        liker_name = liker.username if liker and liker.username else "Someone"
        noun = "post" if target_kind == TARGET_POST else "comment"
        notify_safely(self.dispatcher, owner_id, NotificationMessage(
            type=f"{noun}_like",
            title="New like",
            content=f"{liker_name} liked your {noun}",
            data={"target_id": target_id, "target_kind": target_kind, "actor_id": liker_id},
        ))
