"""Shared fixtures: a fresh SQLite database per test, factories, a recording dispatcher.

The database is a file under tmp_path rather than :memory: so that two
sessions can hold separate connections, which the lost-race tests rely on.
"""

import os
import uuid

# Point the app at SQLite before anything imports app.db.session
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_campuscrush.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.deps import get_notification_dispatcher
from app.main import app
from app.modules.express.schemas.order import ExpressOrderCreate
from app.modules.express.services.order import create_order
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.models.post import Post
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import Actor, ROLE_ADMIN


class RecordingDispatcher:
    """Collects (user_id, message) pairs instead of delivering them."""

    def __init__(self):
        self.sent = []

    def notify(self, user_id, message):
        self.sent.append((user_id, message))

    def types_for(self, user_id):
        return [message.type for recipient, message in self.sent if recipient == user_id]


class FailingDispatcher:
    def notify(self, user_id, message):
        raise RuntimeError("push gateway unavailable")


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'campuscrush.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def make_user(db):
    def _make(username, is_admin=False):
        user = User(
            id=str(uuid.uuid4()),
            email=f"{username}@campus.edu",
            username=username,
            full_name=username.title(),
            is_admin=is_admin,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_post(db):
    def _make(author, content="Anyone selling a used bike?"):
        post = Post(id=str(uuid.uuid4()), content=content, author_id=author.id)
        db.add(post)
        db.commit()
        db.refresh(post)
        return post
    return _make


@pytest.fixture
def make_comment(db):
    def _make(author, post, content="I have one, DM me"):
        comment = Comment(id=str(uuid.uuid4()), content=content, author_id=author.id, post_id=post.id)
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment
    return _make


def order_payload(**overrides):
    payload = {
        "type": "pickup",
        "details": {
            "express_company": "SF Express",
            "tracking_number": "SF1234567890",
            "pickup_location": "North Gate Parcel Station",
            "delivery_location": "Dorm 7",
            "recipient_info": {"name": "Li Wei", "phone": "13800000000", "building": "7", "room": "312"},
        },
        "payment": {"amount": 5, "method": "wechat"},
        "notes": "Fragile",
        "duration_hours": 1,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_order(db):
    def _make(customer, **overrides):
        return create_order(db, ExpressOrderCreate(**order_payload(**overrides)), customer_id=customer.id)
    return _make


def actor_of(user):
    return Actor(id=user.id, role=ROLE_ADMIN if user.is_admin else "user")


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def client(session_factory, dispatcher):
    """FastAPI test client bound to the per-test database and recording dispatcher."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher

    yield TestClient(app)

    app.dependency_overrides.clear()
