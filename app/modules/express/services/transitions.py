"""Parcel order states and the table of legal status transitions."""
from typing import Dict, FrozenSet

PENDING = "pending"
ACCEPTED = "accepted"
PICKED = "picked"
DELIVERED = "delivered"
COMPLETED = "completed"
CANCELLED = "cancelled"

ORDER_STATUSES = (PENDING, ACCEPTED, PICKED, DELIVERED, COMPLETED, CANCELLED)

# current status -> statuses it may move to; terminal states have no entry
ORDER_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    PENDING: frozenset({ACCEPTED, CANCELLED}),
    ACCEPTED: frozenset({PICKED, CANCELLED}),
    PICKED: frozenset({DELIVERED, CANCELLED}),
    DELIVERED: frozenset({COMPLETED}),
}

TERMINAL_STATUSES = frozenset(s for s in ORDER_STATUSES if s not in ORDER_TRANSITIONS)

# Timeline action recorded when an order enters each status
STATUS_LABELS = {
    ACCEPTED: "Order accepted",
    PICKED: "Parcel picked up",
    DELIVERED: "Parcel delivered",
    COMPLETED: "Order completed",
    CANCELLED: "Order cancelled",
}

def allowed_transitions(current_status: str) -> FrozenSet[str]:
    return ORDER_TRANSITIONS.get(current_status, frozenset())

def can_transition(current_status: str, requested_status: str) -> bool:
    return requested_status in allowed_transitions(current_status)

def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES
