"""
Parcel order lifecycle.

Every status change is a guard-check followed by one conditional UPDATE that
only matches while the order still has the status and version the guards
were evaluated against. The same UPDATE appends the timeline entry (and sets
the helper on acceptance), so the audit trail can never disagree with the
status it describes. When the UPDATE matches nothing another request got
there first: the session is rolled back and the guards run again on a fresh
read, which is how the loser of two racing acceptances ends up with
InvalidTransition.
"""
from typing import Callable, Optional
from datetime import datetime
import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AlreadyRated, Conflict, Expired, Forbidden, InvalidInput, InvalidTransition, NotFound
from app.modules.express.models.order import ExpressOrder
from app.modules.express.services.order import get_order, utcnow
from app.modules.express.services.transitions import (
    ACCEPTED, COMPLETED, ORDER_STATUSES, STATUS_LABELS, can_transition
)
from app.modules.notifications.schemas.notification import NotificationMessage
from app.modules.notifications.services.dispatcher import NotificationDispatcher, notify_safely
from app.modules.user_management.schemas.user import Actor

logger = logging.getLogger(__name__)

class OrderLifecycle:
    """Sole writer of order status, helper, timeline and rating"""

    def __init__(
        self,
        db: Session,
        dispatcher: Optional[NotificationDispatcher] = None,
        clock: Callable[[], datetime] = utcnow,
        max_retries: Optional[int] = None,
    ):
        self.db = db
        self.dispatcher = dispatcher
        self.clock = clock
        self.max_retries = settings.CONFLICT_MAX_RETRIES if max_retries is None else max_retries

    def accept(self, order_id: str, actor: Actor, note: str = "") -> ExpressOrder:
        return self.transition(order_id, actor, ACCEPTED, note)

    def transition(self, order_id: str, actor: Actor, requested_status: str, note: str = "") -> ExpressOrder:
        if requested_status not in ORDER_STATUSES:
            raise InvalidInput(f"Status must be one of: {', '.join(ORDER_STATUSES)}")
        note = note or ""

        for attempt in range(self.max_retries + 1):
            order = self._load(order_id)
            now = self.clock()
            self._check_transition(order, actor, requested_status, now)

            values = {
                ExpressOrder.status: requested_status,
                ExpressOrder.timeline: list(order.timeline or []) + [{
                    "action": STATUS_LABELS[requested_status],
                    "timestamp": now.isoformat(),
                    "operator_id": actor.id,
                    "note": note,
                }],
                ExpressOrder.version: order.version + 1,
                ExpressOrder.updated_at: now,
            }
            if requested_status == ACCEPTED:
                values[ExpressOrder.helper_id] = actor.id

            if self._write(order, values):
                order = self._load(order_id)
                logger.info(
                    f"Order {order.order_number} moved to {requested_status} by {actor.id} "
                    f"(timeline entries: {len(order.timeline)})"
                )
                self._notify_transition(order, actor, requested_status)
                return order

            logger.warning(
                f"Order {order_id} changed while moving to {requested_status} (attempt {attempt + 1}), retrying"
            )

        raise Conflict(f"Order {order_id} is being updated by another request, please retry")

    def rate(self, order_id: str, actor: Actor, score: int, comment: str = "") -> ExpressOrder:
        if isinstance(score, bool) or not isinstance(score, int) or not 1 <= score <= 5:
            raise InvalidInput("Score must be an integer between 1 and 5")

        for attempt in range(self.max_retries + 1):
            order = self._load(order_id)
            if order.status != COMPLETED:
                raise InvalidTransition("Only completed orders can be rated")
            if actor.id != order.customer_id:
                raise Forbidden("Only the customer can rate this order")
            if order.rating_score is not None:
                raise AlreadyRated()

            values = {
                ExpressOrder.rating_score: score,
                ExpressOrder.rating_comment: comment or "",
                ExpressOrder.rated_by: actor.id,
                ExpressOrder.rated_at: self.clock(),
                ExpressOrder.version: order.version + 1,
            }
            if self._write(order, values, ExpressOrder.rating_score.is_(None)):
                order = self._load(order_id)
                logger.info(f"Order {order.order_number} rated {score} by {actor.id}")
                return order

            logger.warning(f"Order {order_id} changed while being rated (attempt {attempt + 1}), retrying")

        raise Conflict(f"Order {order_id} is being updated by another request, please retry")

    def _load(self, order_id: str) -> ExpressOrder:
        order = get_order(self.db, order_id)
        if not order:
            raise NotFound("Order not found")
        return order

    def _check_transition(self, order: ExpressOrder, actor: Actor, requested_status: str, now: datetime) -> None:
        is_customer = actor.id == order.customer_id
        is_helper = order.helper_id is not None and actor.id == order.helper_id

        if requested_status == ACCEPTED:
            # Anyone but the customer may take an order; the acceptor becomes its helper
            if is_customer:
                raise Forbidden("You cannot accept your own order")
            if now >= order.expires_at:
                raise Expired()
        elif not (is_customer or is_helper or actor.is_admin):
            raise Forbidden("You do not have permission to update this order")

        if not can_transition(order.status, requested_status):
            raise InvalidTransition(current_status=order.status, requested_status=requested_status)
        if requested_status == ACCEPTED and order.helper_id is not None:
            raise InvalidTransition("Order already has a helper")

    def _write(self, order: ExpressOrder, values: dict, *conditions) -> bool:
        """Apply values only if the order still matches what was read; commit on success"""
        updated = (
            self.db.query(ExpressOrder)
            .filter(
                ExpressOrder.id == order.id,
                ExpressOrder.status == order.status,
                ExpressOrder.version == order.version,
                *conditions,
            )
            .update(values, synchronize_session=False)
        )
        if not updated:
            self.db.rollback()
            return False

        self.db.commit()
        return True

    def _notify_transition(self, order: ExpressOrder, actor: Actor, new_status: str) -> None:
        if self.dispatcher is None:
            return

        # The other party: the helper when the customer acted, otherwise the customer
        recipient_id = order.helper_id if actor.id == order.customer_id else order.customer_id
        if not recipient_id or recipient_id == actor.id:
            return

        if new_status == ACCEPTED:
            message = NotificationMessage(
                type="order_accepted",
                title="Your parcel order was accepted",
                content=f"Order {order.order_number} was accepted by a helper",
                data={"order_id": order.id, "order_number": order.order_number, "status": new_status, "actor_id": actor.id},
            )
        else:
            message = NotificationMessage(
                type="order_status_update",
                title="Order status updated",
                content=f"Order {order.order_number}: {STATUS_LABELS[new_status]}",
                data={"order_id": order.id, "order_number": order.order_number, "status": new_status, "actor_id": actor.id},
            )
        notify_safely(self.dispatcher, recipient_id, message)
