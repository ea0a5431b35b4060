"""Order state table: legal moves, terminal states, labels."""

import pytest

from app.modules.express.services.transitions import (
    ORDER_STATUSES,
    ORDER_TRANSITIONS,
    STATUS_LABELS,
    TERMINAL_STATUSES,
    allowed_transitions,
    can_transition,
    is_terminal,
)


@pytest.mark.parametrize("current, requested", [
    ("pending", "accepted"),
    ("pending", "cancelled"),
    ("accepted", "picked"),
    ("accepted", "cancelled"),
    ("picked", "delivered"),
    ("picked", "cancelled"),
    ("delivered", "completed"),
])
def test_legal_moves(current, requested):
    assert can_transition(current, requested)


@pytest.mark.parametrize("current, requested", [
    ("pending", "picked"),
    ("accepted", "delivered"),
    ("delivered", "cancelled"),
    ("completed", "pending"),
    ("cancelled", "accepted"),
    ("pending", "pending"),
])
def test_illegal_moves(current, requested):
    assert not can_transition(current, requested)


def test_terminal_states():
    assert TERMINAL_STATUSES == {"completed", "cancelled"}
    assert is_terminal("completed")
    assert not is_terminal("delivered")
    assert allowed_transitions("cancelled") == frozenset()


def test_every_reachable_status_has_a_timeline_label():
    reachable = set().union(*ORDER_TRANSITIONS.values())
    assert reachable <= set(STATUS_LABELS)
    assert set(ORDER_TRANSITIONS) | TERMINAL_STATUSES == set(ORDER_STATUSES)
