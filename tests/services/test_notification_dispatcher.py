"""Database-backed notification dispatcher."""

import logging

from app.modules.notifications.models.notification import Notification
from app.modules.notifications.schemas.notification import NotificationMessage
from app.modules.notifications.services.dispatcher import DatabaseNotificationDispatcher, notify_safely

from conftest import FailingDispatcher


def _message(**data):
    return NotificationMessage(type="order_accepted", title="Accepted", content="Order EXP1 accepted", data=data)


def test_notification_row_is_written_in_its_own_session(db, session_factory, make_user):
    customer, helper = make_user("customer"), make_user("helper")

    DatabaseNotificationDispatcher(session_factory).notify(
        customer.id, _message(order_id="order-1", actor_id=helper.id),
    )

    stored = db.query(Notification).one()
    assert stored.user_id == customer.id
    assert stored.actor_id == helper.id
    assert stored.related_id == "order-1"
    assert stored.data == {"order_id": "order-1", "actor_id": helper.id}
    assert stored.is_read is False


def test_notify_safely_logs_and_reports_failure(caplog):
    with caplog.at_level(logging.ERROR):
        delivered = notify_safely(FailingDispatcher(), "user-1", _message())

    assert delivered is False
    assert "user-1" in caplog.text


def test_notify_safely_reports_success(dispatcher):
    assert notify_safely(dispatcher, "user-1", _message()) is True
    assert dispatcher.types_for("user-1") == ["order_accepted"]
