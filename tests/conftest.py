import os
import uuid

os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from ucom.config import settings
from ucom import dependencies
from ucom.models.base import Base
# Import all model classes to ensure they're registered with SQLAlchemy
from ucom.models.org import Org
from ucom.models.brand import Brand
from ucom.models.location import Location
# Import FastAPI app AFTER model imports
from ucom.main import app

TENANT_A = uuid.UUID("aaaaaaaa-0000-4000-8000-000000000001")
TENANT_B = uuid.UUID("bbbbbbbb-0000-4000-8000-000000000002")

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Every set_config() call issued through the test engine, in order
SET_CONFIG_CALLS: list[tuple] = []


@event.listens_for(engine, "connect")
def _sqlite_connect(dbapi_connection, connection_record):
    """Enforce composite foreign keys and stand in for Postgres set_config()"""

    def set_config(name, value, is_local):
        SET_CONFIG_CALLS.append((name, value, bool(is_local)))
        return value

    dbapi_connection.create_function("set_config", 3, set_config)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    SET_CONFIG_CALLS.clear()
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session, monkeypatch):
    """FastAPI test client; requests get real tenant sessions on the test engine"""
    monkeypatch.setattr(dependencies, "get_engine", lambda: engine)
    with TestClient(app) as test_client:
        yield test_client


def create_test_token(
    subject: str = "test-user-123",
    tenant_id: uuid.UUID | str | None = TENANT_A,
    expired: bool = False,
) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        subject: Principal to embed in 'sub' claim
        tenant_id: Tenant to embed in 'tenant_id' claim (None omits it)
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": subject, "exp": exp, "iat": datetime.now(UTC)}
    if tenant_id is not None:
        payload["tenant_id"] = str(tenant_id)

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


@pytest.fixture
def auth_headers():
    """Authorization headers for tenant A"""
    return {"Authorization": f"Bearer {create_test_token()}"}


@pytest.fixture
def tenant_b_headers():
    """Authorization headers for tenant B"""
    token = create_test_token(subject="user-b", tenant_id=TENANT_B)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def org(client, auth_headers):
    """An org owned by tenant A"""
    response = client.post("/api/orgs", headers=auth_headers, json={"name": "Org A"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def brand(client, auth_headers, org):
    """A brand under tenant A's org"""
    response = client.post(
        "/api/brands",
        headers=auth_headers,
        json={"org_id": org["org_id"], "name": "Brand A", "slug": "brand-a"},
    )
    assert response.status_code == 201
    return response.json()
