"""
Tests for the persisted request log: middleware rows, read-only routes
and retention purge.
"""

import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from rest_api.models import Log
from rest_api.routers._common.pagination import TOTAL_COUNT_HEADER
from rest_api.services.domain import LogService
from rest_api.services.domain.log_service import months_before
from shared.config.constants import Role
from shared.infrastructure.correlation import resolve_request_id
from shared.security.principal import Principal
from shared.utils.exceptions import ValidationError

UTC = timezone.utc

REPORT_BODY = {"title": "Relatório", "short_description": "Resumo", "year": 2024}
CONTACT_BODY = {"name": "Ana", "email": "ana@example.com", "message": "Oi"}


def _logs(db_session):
    return db_session.scalars(select(Log)).all()


def _entry(**overrides):
    entry = {"ip": "127.0.0.1", "method": "POST", "url": "/api/report", "status_code": "201"}
    entry.update(overrides)
    return entry


class TestRequestLogRows:
    """Rows written by the request middleware."""

    def test_write_is_logged_with_principal(self, client, db_session, admin, admin_headers):
        response = client.post("/api/report", json=REPORT_BODY, headers=admin_headers)
        assert response.status_code == 201

        [log] = _logs(db_session)
        assert log.method == "POST"
        assert log.url == "/api/report"
        assert log.status_code == "201"
        assert log.user_id == admin.id
        assert log.user_role == "ADMIN"
        assert log.body["title"] == "Relatório"
        assert log.request_id == response.headers["X-Request-ID"]

    def test_reads_are_not_logged(self, client, db_session, field_one):
        client.get("/api/report")
        client.get("/api/report/missing")
        assert _logs(db_session) == []

    def test_anonymous_request_has_no_user(self, client, db_session):
        client.post("/api/contact", json=CONTACT_BODY)
        [log] = _logs(db_session)
        assert log.user_id is None
        assert log.status_code == "201"

    def test_sensitive_keys_redacted(self, client, db_session):
        client.post("/api/contact", json={**CONTACT_BODY, "password": "hunter2"})
        [log] = _logs(db_session)
        assert log.body["password"] == "***redacted***"
        assert log.body["name"] == "Ana"

    def test_rejected_request_is_logged(self, client, db_session, field_one):
        client.post("/api/report", json=REPORT_BODY)
        [log] = _logs(db_session)
        assert log.status_code == "401"
        assert log.user_id is None

    def test_failed_write_keeps_response(self, client, db_session, monkeypatch):
        def broken(self, entry):
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(LogService, "record", broken)

        response = client.post("/api/contact", json=CONTACT_BODY)
        assert response.status_code == 201
        assert _logs(db_session) == []


class TestLogRoutes:
    """GET /api/log is WEB_MASTER only and has no mutation routes."""

    def test_web_master_lists_logs(self, client, admin_headers, web_master_headers):
        client.post("/api/report", json=REPORT_BODY, headers=admin_headers)
        client.post("/api/contact", json=CONTACT_BODY)

        response = client.get("/api/log", headers=web_master_headers)
        assert response.status_code == 200
        assert response.headers[TOTAL_COUNT_HEADER] == "2"
        assert {log["url"] for log in response.json()} == {"/api/report", "/api/contact"}

    def test_search_by_url(self, client, admin_headers, web_master_headers):
        client.post("/api/report", json=REPORT_BODY, headers=admin_headers)
        client.post("/api/contact", json=CONTACT_BODY)

        response = client.get("/api/log", params={"search": "contact"}, headers=web_master_headers)
        assert [log["url"] for log in response.json()] == ["/api/contact"]

    def test_get_one(self, client, web_master_headers):
        client.post("/api/contact", json=CONTACT_BODY)
        [log] = client.get("/api/log", headers=web_master_headers).json()

        response = client.get(f"/api/log/{log['id']}", headers=web_master_headers)
        assert response.json()["method"] == "POST"

    def test_admin_forbidden(self, client, admin_headers):
        response = client.get("/api/log", headers=admin_headers)
        assert response.status_code == 403

    def test_anonymous_unauthorized(self, client):
        assert client.get("/api/log").status_code == 401
        assert client.get("/api/log/any").status_code == 401

    def test_restricted_web_master_reads(self, client, make_headers):
        principal = Principal(id="wm-2", role=Role.WEB_MASTER, restricted=True)
        response = client.get("/api/log", headers=make_headers(principal))
        assert response.status_code == 200

    def test_no_delete_route(self, client, web_master_headers):
        response = client.delete("/api/log/any", headers=web_master_headers)
        assert response.status_code == 405


class TestPurge:
    """Retention purge behind `field-ops logs-purge`."""

    def test_purges_rows_at_or_before_cutoff(self, db_session):
        service = LogService(db_session)
        old = service.record(_entry(url="/old"))
        boundary = service.record(_entry(url="/boundary"))
        recent = service.record(_entry(url="/recent"))
        old.created_at = datetime(2024, 1, 10, tzinfo=UTC)
        boundary.created_at = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)
        recent.created_at = datetime(2024, 4, 1, tzinfo=UTC)
        db_session.commit()

        count = service.purge_older_than(3, now=datetime(2024, 6, 15, 12, 0, tzinfo=UTC))

        assert count == 2
        assert [log.url for log in _logs(db_session)] == ["/recent"]

    def test_nothing_to_purge(self, db_session):
        service = LogService(db_session)
        service.record(_entry())
        assert service.purge_older_than(3) == 0
        assert len(_logs(db_session)) == 1

    def test_months_must_be_positive(self, db_session):
        with pytest.raises(ValidationError):
            LogService(db_session).purge_older_than(0)

    @pytest.mark.parametrize(
        "moment, months, expected",
        [
            (datetime(2024, 3, 31), 1, datetime(2024, 2, 29)),
            (datetime(2024, 1, 15), 1, datetime(2023, 12, 15)),
            (datetime(2024, 5, 31), 15, datetime(2023, 2, 28)),
        ],
    )
    def test_months_before(self, moment, months, expected):
        assert months_before(moment, months) == expected


class TestRequestId:
    def test_caller_id_kept(self):
        assert resolve_request_id("req-123") == "req-123"

    def test_unsafe_id_replaced(self):
        request_id = resolve_request_id("bad id\nwith newline")
        assert uuid.UUID(request_id)

    def test_unsafe_header_not_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "x" * 100})
        assert response.headers["X-Request-ID"] != "x" * 100
