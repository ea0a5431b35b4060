from typing import Any, Optional

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_actor, get_notification_dispatcher
from app.modules.notifications.services.dispatcher import NotificationDispatcher
from app.modules.user_management.schemas.user import Actor
from app.modules.express.schemas.order import (
    ExpressOrder as ExpressOrderSchema, ExpressOrderCreate, OrderAccept, OrderRate, OrderTransition
)
from app.modules.express.services.lifecycle import OrderLifecycle
from app.modules.express.services.order import create_order, get_order_for_actor

router = APIRouter()

@router.post("", response_model=ExpressOrderSchema, status_code=status.HTTP_201_CREATED)
def create_express_order(
    *,
    db: Session = Depends(get_db),
    order_in: ExpressOrderCreate,
    actor: Actor = Depends(get_current_actor),
) -> Any:
    """Place a new parcel pickup/delivery order"""
    return create_order(db, order_in, customer_id=actor.id)

@router.get("/{order_id}", response_model=ExpressOrderSchema)
def read_express_order(
    *,
    db: Session = Depends(get_db),
    order_id: str = Path(..., description="The ID of the order"),
    actor: Actor = Depends(get_current_actor),
) -> Any:
    """Get order details; visible to its customer, its helper and admins"""
    return get_order_for_actor(db, order_id, actor)

@router.post("/{order_id}/accept", response_model=ExpressOrderSchema)
def accept_express_order(
    *,
    db: Session = Depends(get_db),
    order_id: str = Path(..., description="The ID of the order to accept"),
    accept_in: Optional[OrderAccept] = None,
    actor: Actor = Depends(get_current_actor),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> Any:
    """Accept a pending order as its helper"""
    note = accept_in.note if accept_in else ""
    return OrderLifecycle(db, dispatcher=dispatcher).accept(order_id, actor, note)

@router.post("/{order_id}/transition", response_model=ExpressOrderSchema)
def transition_express_order(
    *,
    db: Session = Depends(get_db),
    order_id: str = Path(..., description="The ID of the order to update"),
    transition_in: OrderTransition,
    actor: Actor = Depends(get_current_actor),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> Any:
    """Move an order to its next status"""
    lifecycle = OrderLifecycle(db, dispatcher=dispatcher)
    return lifecycle.transition(order_id, actor, transition_in.status, transition_in.note)

@router.post("/{order_id}/rate", response_model=ExpressOrderSchema)
def rate_express_order(
    *,
    db: Session = Depends(get_db),
    order_id: str = Path(..., description="The ID of the order to rate"),
    rate_in: OrderRate,
    actor: Actor = Depends(get_current_actor),
) -> Any:
    """Rate a completed order, once, as its customer"""
    return OrderLifecycle(db).rate(order_id, actor, rate_in.score, rate_in.comment)
