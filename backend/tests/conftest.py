"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time; point them at throwaway backends first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base, Field
from rest_api.services.base_service import FieldScopedService
from rest_api.services.crud.registry import get_resource
from shared.config.constants import Role
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt
from shared.security.principal import Principal


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Fields and principals
# =============================================================================


def _make_field(db_session, abbreviation: str, state: str) -> Field:
    field = Field(
        continent="América do Sul",
        country="Brasil",
        state=state,
        abbreviation=abbreviation,
        designation=f"Campo {abbreviation}",
    )
    db_session.add(field)
    db_session.commit()
    db_session.refresh(field)
    return field


@pytest.fixture
def field_one(db_session):
    """Field (tenant) F1."""
    return _make_field(db_session, "AME-BR-SP", "São Paulo")


@pytest.fixture
def field_two(db_session):
    """Field (tenant) F2."""
    return _make_field(db_session, "AME-BR-RJ", "Rio de Janeiro")


@pytest.fixture
def volunteer(field_one):
    return Principal(id="volunteer-1", role=Role.VOLUNTEER, field_id=field_one.id)


@pytest.fixture
def admin(field_one):
    return Principal(id="admin-1", role=Role.ADMIN, field_id=field_one.id)


@pytest.fixture
def other_admin(field_two):
    """ADMIN of F2."""
    return Principal(id="admin-2", role=Role.ADMIN, field_id=field_two.id)


@pytest.fixture
def web_master():
    return Principal(id="web-master", role=Role.WEB_MASTER)


@pytest.fixture
def restricted_admin(field_one):
    return Principal(id="admin-3", role=Role.ADMIN, field_id=field_one.id, restricted=True)


def _headers_for(principal: Principal) -> dict[str, str]:
    """Bearer headers carrying the principal's claims."""
    claims = {"sub": principal.id, "role": principal.role.value, "restricted": principal.restricted}
    if principal.field_id:
        claims["field_id"] = principal.field_id
    return {"Authorization": f"Bearer {sign_jwt(claims)}"}


@pytest.fixture
def volunteer_headers(volunteer):
    return _headers_for(volunteer)


@pytest.fixture
def admin_headers(admin):
    return _headers_for(admin)


@pytest.fixture
def web_master_headers(web_master):
    return _headers_for(web_master)


@pytest.fixture
def restricted_headers(restricted_admin):
    return _headers_for(restricted_admin)


# =============================================================================
# Services and records
# =============================================================================


@pytest.fixture
def report_service(db_session):
    """Generic lifecycle engine bound to the report resource."""
    return FieldScopedService(db_session, get_resource("report"))


def _report_payload(**overrides):
    payload = {
        "title": "Relatório de março",
        "short_description": "Resumo das ações do mês",
        "text": "Distribuição de cestas básicas",
        "attachments": [],
        "month": 3,
        "year": 2024,
        "type": "ORDINARY",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def seed_reports(report_service, admin):
    """Three active reports of F1."""
    return [
        report_service.create(admin, _report_payload(title=f"Relatório {n}", month=n))
        for n in (1, 2, 3)
    ]


@pytest.fixture
def seed_foreign_report(report_service, other_admin):
    """An active report of F2."""
    return report_service.create(other_admin, _report_payload(title="Relatório do Rio"))


@pytest.fixture
def make_headers():
    """Build bearer headers for an arbitrary principal."""
    return _headers_for


@pytest.fixture
def report_payload():
    """Build a valid report create payload, with overrides."""
    return _report_payload
