from __future__ import annotations

import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./.test_invoices.db")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_db_session
from app.core.page_cache import page_cache
from app.database.db import enable_sqlite_foreign_keys
from app.database.models import Base, Customer
from app.services.user_service import UserService

TEST_EMAIL = "user@nextmail.com"
TEST_PASSWORD = "123456"


@pytest.fixture(autouse=True)
def _fresh_page_cache():
    page_cache.clear()
    yield
    page_cache.clear()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def customer(db_session):
    record = Customer(id="c1", name="Evil Rabbit", email="evil@rabbit.com", image_url=None)
    db_session.add(record)
    db_session.commit()
    return record


@pytest.fixture
def user(db_session):
    return UserService(db=db_session).create_user(name="User", email=TEST_EMAIL, password=TEST_PASSWORD)


@pytest.fixture
def client(session_factory):
    from app.main import create_app

    app = create_app()

    def _override_db_session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = _override_db_session
    return TestClient(app)


@pytest.fixture
def signed_in_client(client, user):
    response = client.post(
        "/login",
        data={"email": TEST_EMAIL, "password": TEST_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client
