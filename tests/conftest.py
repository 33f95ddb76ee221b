import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("FACTORY_URL", "http://factory.test.local")
os.environ.setdefault("FACTORY_API_KEY", "test-factory-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, init_db
from app.core.config import settings
from app.schemas.user import UserCreate
from app.services.user import user_service
from main import app as api


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def enforce_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = override_get_db
    yield TestClient(api)
    api.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(name="pizza diner", email="diner@test.com", password="diner", roles=None):
        return user_service.add_user(
            db,
            UserCreate(name=name, email=email, password=password, roles=roles or []),
        )
    return _make_user


@pytest.fixture
def admin_credentials():
    return {"email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD}


@pytest.fixture
def login(client):
    def _login(email, password):
        response = client.put("/api/auth", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()
    return _login


@pytest.fixture
def admin_headers(login, admin_credentials):
    token = login(**admin_credentials)["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def diner_headers(login, make_user):
    make_user(name="pizza diner", email="diner@test.com", password="diner")
    token = login("diner@test.com", "diner")["token"]
    return {"Authorization": f"Bearer {token}"}
