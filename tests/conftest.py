# tests/conftest.py
import os
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Настройки для тестов выставляем до импорта приложения
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CREATE_TABLES"] = "false"

from blog_platform.main import app
from blog_platform.models import Base, User, ROLE_ADMIN
from blog_platform.utils.database import get_db

DEFAULT_PASSWORD = "secret123"


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def override_get_db(session_factory: sessionmaker) -> Iterator[None]:
    # Как и в проде: своя сессия на каждый запрос
    def _get_db_override():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def make_client() -> Iterator[Callable[..., TestClient]]:
    """Фабрика клиентов: у каждого свой cookie-jar, т.е. своя сессия."""
    clients: list[TestClient] = []

    def _make(**kwargs) -> TestClient:
        test_client = TestClient(app, **kwargs)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client()


def register(client: TestClient, username: str, email: str | None = None, password: str = DEFAULT_PASSWORD) -> dict:
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def create_post(client: TestClient, **fields) -> dict:
    payload = {"title": "Hi", "content": "World"}
    payload.update(fields)
    response = client.post("/api/blogs", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def make_admin(db_session: Session, user_id: int) -> None:
    db_session.query(User).filter(User.id == user_id).update({User.role: ROLE_ADMIN})
    db_session.commit()


@pytest.fixture()
def alice(make_client) -> tuple[TestClient, dict]:
    alice_client = make_client()
    return alice_client, register(alice_client, "alice")


@pytest.fixture()
def bob(make_client) -> tuple[TestClient, dict]:
    bob_client = make_client()
    return bob_client, register(bob_client, "bob")
