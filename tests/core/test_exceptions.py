"""Error taxonomy and its HTTP mapping."""

from app.core.exceptions import (
    AlreadyRated, CampusCrushError, Conflict, Expired, Forbidden, InvalidInput, InvalidTransition, NotFound,
)


def test_each_kind_has_a_distinct_code():
    kinds = [NotFound, Forbidden, InvalidTransition, Expired, AlreadyRated, Conflict, InvalidInput]
    codes = {kind.code for kind in kinds}
    assert len(codes) == len(kinds)
    assert all(issubclass(kind, CampusCrushError) for kind in kinds)


def test_http_statuses():
    assert NotFound().http_status == 404
    assert Forbidden().http_status == 403
    assert Expired().http_status == 410
    assert InvalidInput().http_status == 422
    assert Conflict().http_status == 409


def test_invalid_transition_message_names_both_states():
    exc = InvalidTransition(current_status="accepted", requested_status="delivered")
    assert "accepted" in exc.message and "delivered" in exc.message
    assert str(exc) == exc.message


def test_default_and_custom_messages():
    assert AlreadyRated().message == "Order has already been rated"
    assert NotFound("Post not found").message == "Post not found"
