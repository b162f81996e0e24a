import itertools
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from groupcart.core.security import create_access_token
from groupcart.database import Base, get_db
from groupcart.main import app
from groupcart.models.group import MemberRole, group_members
from groupcart.models.user import User


@pytest.fixture
def engine():
    # One shared in-memory database per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
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
def make_user(db):
    counter = itertools.count(1)

    def _make(name=None):
        n = next(counter)
        user = User(
            email=f"user{n}@example.com",
            name=name or f"User {n}",
            hashed_password="unused",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def add_member(db):
    """Insert a membership row directly, with full control over role and tenure."""

    def _add(group_id, user_id, role=MemberRole.MEMBER, joined_at=None):
        db.execute(
            insert(group_members).values(
                group_id=group_id,
                user_id=user_id,
                role=role.value,
                joined_at=joined_at or datetime.utcnow(),
            )
        )
        db.commit()

    return _add


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token(data={"sub": str(user.id), "email": user.email})
        return {"Authorization": f"Bearer {token}"}

    return _headers
