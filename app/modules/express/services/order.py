from typing import Callable, Optional
from datetime import datetime, timedelta, timezone
import logging
import secrets
import string
import uuid

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import Forbidden, InvalidInput, NotFound
from app.modules.express.models.order import ExpressOrder
from app.modules.express.schemas.order import ExpressOrderCreate
from app.modules.express.services.transitions import PENDING
from app.modules.user_management.schemas.user import Actor

logger = logging.getLogger(__name__)

ORDER_NUMBER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits

def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)

def generate_order_number(now: Optional[datetime] = None) -> str:
    """EXP + epoch milliseconds + six random upper-case alphanumerics"""
    now = now or utcnow()
    millis = int(now.replace(tzinfo=timezone.utc).timestamp() * 1000)
    suffix = "".join(secrets.choice(ORDER_NUMBER_SUFFIX_ALPHABET) for _ in range(6))
    return f"EXP{millis}{suffix}"

def get_order(db: Session, order_id: str) -> Optional[ExpressOrder]:
    """Get order by ID"""
    return db.query(ExpressOrder).filter(ExpressOrder.id == order_id).first()

def create_order(
    db: Session,
    order_in: ExpressOrderCreate,
    customer_id: str,
    clock: Callable[[], datetime] = utcnow,
) -> ExpressOrder:
    """Create a pending order that expires after the requested number of hours"""
    duration = order_in.duration_hours or settings.ORDER_DEFAULT_DURATION_HOURS
    if duration > settings.ORDER_MAX_DURATION_HOURS:
        raise InvalidInput(f"Order duration cannot exceed {settings.ORDER_MAX_DURATION_HOURS} hours")

    now = clock()
    order = ExpressOrder(
        id=str(uuid.uuid4()),
        order_number=generate_order_number(now),
        customer_id=customer_id,
        type=order_in.type,
        details=order_in.details.model_dump(),
        payment=order_in.payment.model_dump(),
        notes=order_in.notes,
        status=PENDING,
        timeline=[],
        expires_at=now + timedelta(hours=duration),
        version=1,
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info(f"Created express order {order.order_number} for customer {customer_id}")
    return order

def get_order_for_actor(db: Session, order_id: str, actor: Actor) -> ExpressOrder:
    """Get an order visible to the actor: its customer, its helper or an admin"""
    order = get_order(db, order_id)
    if not order:
        raise NotFound("Order not found")

    if actor.id not in (order.customer_id, order.helper_id) and not actor.is_admin:
        raise Forbidden("You do not have permission to view this order")
    return order
