"""
Tests for the resource HTTP endpoints.
"""

import pytest

from rest_api.routers._common.pagination import TOTAL_COUNT_HEADER, TOTAL_PAGES_HEADER
from shared.config.constants import Messages


REPORT_BODY = {
    "title": "Relatório de abril",
    "short_description": "Resumo",
    "year": 2024,
    "month": 4,
}


def _create_report(client, headers, **overrides):
    response = client.post("/api/report", json={**REPORT_BODY, **overrides}, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()


class TestPublicReads:
    """GET endpoints need no token."""

    def test_list_sets_total_headers(self, client, admin_headers):
        for n in range(3):
            _create_report(client, admin_headers, title=f"Relatório {n}")

        response = client.get("/api/report", params={"itemsPerPage": 2, "page": 2})

        assert response.status_code == 200
        assert len(response.json()) == 1
        assert response.headers[TOTAL_COUNT_HEADER] == "3"
        assert response.headers[TOTAL_PAGES_HEADER] == "2"

    def test_missing_record_is_null(self, client, field_one):
        response = client.get("/api/report/does-not-exist")
        assert response.status_code == 200
        assert response.json() is None

    def test_get_one(self, client, admin_headers):
        created = _create_report(client, admin_headers)
        response = client.get(f"/api/report/{created['id']}")
        assert response.json()["title"] == "Relatório de abril"

    def test_search_parity_mismatch(self, client, field_one):
        response = client.get(
            "/api/report",
            params={"searchSpecificField": "year,month", "searchSpecificValue": "2024"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == Messages.SEARCH_QUERY_PARITY

    def test_structured_filter(self, client, admin_headers):
        _create_report(client, admin_headers, year=2023)
        _create_report(client, admin_headers, year=2024)

        response = client.get(
            "/api/report",
            params={"searchSpecificField": "year", "searchSpecificValue": "2023"},
        )
        assert [r["year"] for r in response.json()] == [2023]

    def test_invalid_sort_key(self, client, field_one):
        response = client.get("/api/report", params={"sortBy": "nope"})
        assert response.status_code == 400

    def test_json_sort_key_rejected(self, client, field_one):
        response = client.get("/api/church", params={"sortBy": "images"})
        assert response.status_code == 400


class TestAuthentication:
    """Writes need a valid bearer token."""

    def test_create_without_token(self, client, field_one):
        response = client.post("/api/report", json=REPORT_BODY)
        assert response.status_code == 401

    def test_create_with_garbage_token(self, client, field_one):
        response = client.post(
            "/api/report", json=REPORT_BODY, headers={"Authorization": "Bearer garbage"}
        )
        assert response.status_code == 401

    def test_restricted_cannot_write(self, client, restricted_headers):
        response = client.post("/api/report", json=REPORT_BODY, headers=restricted_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == Messages.RESTRICTED

    def test_restricted_can_read(self, client, restricted_headers):
        response = client.get("/api/report", headers=restricted_headers)
        assert response.status_code == 200


class TestCreateAndUpdate:
    def test_field_forced_to_principal(self, client, volunteer, volunteer_headers, field_two):
        created = _create_report(client, volunteer_headers, field=field_two.id)
        assert created["field_id"] == volunteer.field_id

    def test_web_master_requires_field(self, client, web_master_headers):
        response = client.post("/api/report", json=REPORT_BODY, headers=web_master_headers)
        assert response.status_code == 400

    def test_web_master_with_field(self, client, web_master_headers, field_two):
        created = _create_report(client, web_master_headers, field_id=field_two.id)
        assert created["field_id"] == field_two.id

    def test_invalid_body(self, client, admin_headers):
        response = client.post("/api/report", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 422

    def test_partial_update(self, client, admin_headers):
        created = _create_report(client, admin_headers)
        response = client.put(
            f"/api/report/{created['id']}", json={"title": "Atualizado"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Atualizado"
        assert response.json()["short_description"] == "Resumo"

    def test_null_clears_nullable_column(self, client, admin_headers):
        created = _create_report(client, admin_headers, text="corpo")
        response = client.put(
            f"/api/report/{created['id']}", json={"text": None}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["text"] is None
        assert response.json()["title"] == "Relatório de abril"

    def test_null_on_required_column_rejected(self, client, admin_headers):
        created = _create_report(client, admin_headers)
        response = client.put(
            f"/api/report/{created['id']}", json={"title": None}, headers=admin_headers
        )
        assert response.status_code == 400
        assert client.get(f"/api/report/{created['id']}").json()["title"] == "Relatório de abril"

    def test_update_foreign_forbidden(self, client, admin_headers, make_headers, other_admin):
        created = _create_report(client, make_headers(other_admin))
        response = client.put(
            f"/api/report/{created['id']}", json={"title": "x"}, headers=admin_headers
        )
        assert response.status_code == 403

    def test_update_missing_not_found(self, client, admin_headers):
        response = client.put("/api/report/missing", json={"title": "x"}, headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "relatório não encontrado"


class TestDeleteRestorePurge:
    def test_soft_delete_then_restore(self, client, admin_headers):
        created = _create_report(client, admin_headers)

        removed = client.delete(f"/api/report/{created['id']}", headers=admin_headers)
        assert removed.status_code == 200
        assert removed.json()["deleted"] is not None
        assert client.get(f"/api/report/{created['id']}").json() is None

        restored = client.put(
            "/api/report/restore", json={"ids": [created["id"]]}, headers=admin_headers
        )
        assert restored.status_code == 200
        assert restored.json() == {"count": 1}
        assert client.get(f"/api/report/{created['id']}").json()["deleted"] is None

    def test_restore_requires_admin(self, client, volunteer_headers):
        response = client.put("/api/report/restore", json={"ids": ["x"]}, headers=volunteer_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == Messages.NOT_AUTHORIZED

    def test_restore_empty_ids(self, client, admin_headers):
        response = client.put("/api/report/restore", json={"ids": []}, headers=admin_headers)
        assert response.status_code == 422

    def test_hard_remove(self, client, admin_headers, web_master_headers):
        created = _create_report(client, admin_headers)

        response = client.request(
            "DELETE",
            "/api/report/hard-remove",
            json={"ids": [created["id"]]},
            headers=web_master_headers,
        )
        assert response.status_code == 200
        assert response.json() == {"count": 1}

        again = client.put(
            "/api/report/restore", json={"ids": [created["id"]]}, headers=web_master_headers
        )
        assert again.status_code == 404
        assert again.json()["detail"] == "relatórios não encontrados"

    def test_hard_remove_mixed_fields_forbidden(
        self, client, admin_headers, make_headers, other_admin
    ):
        own = _create_report(client, admin_headers)
        foreign = _create_report(client, make_headers(other_admin))

        response = client.request(
            "DELETE",
            "/api/report/hard-remove",
            json={"ids": [own["id"], foreign["id"]]},
            headers=admin_headers,
        )
        assert response.status_code == 403
        assert client.get(f"/api/report/{own['id']}").json() is not None

    def test_hard_remove_requires_admin(self, client, volunteer_headers):
        response = client.request(
            "DELETE", "/api/report/hard-remove", json={"ids": ["x"]}, headers=volunteer_headers
        )
        assert response.status_code == 403


class TestResourceExtras:
    def test_announcement_range(self, client, admin_headers):
        client.post(
            "/api/announcement",
            json={"title": "Fixado", "message": "m", "fixed": True},
            headers=admin_headers,
        )
        response = client.get(
            "/api/announcement/range",
            params={"gte": "2000-01-01T00:00:00Z", "lte": "2000-01-31T00:00:00Z"},
        )
        assert response.status_code == 200
        assert [a["title"] for a in response.json()] == ["Fixado"]

    def test_inverted_range(self, client, field_one):
        response = client.get(
            "/api/agenda/range",
            params={"gte": "2024-02-01T00:00:00Z", "lte": "2024-01-01T00:00:00Z"},
        )
        assert response.status_code == 400

    def test_reported_years(self, client, admin, admin_headers):
        _create_report(client, admin_headers, year=2022)
        _create_report(client, admin_headers, year=2024)

        response = client.get(f"/api/report/reported-years/{admin.field_id}")
        assert response.json() == [2022, 2024]

    def test_collected_period(self, client, admin, admin_headers):
        for month in (3, 1):
            client.post(
                "/api/monthly-offer",
                json={"year": 2024, "month": month, "food_qnt": 5},
                headers=admin_headers,
            )

        response = client.get(f"/api/monthly-offer/collected-period/{admin.field_id}")
        assert response.json() == {"2024": [1, 3]}

    def test_file_bulk_remove(self, client, admin_headers):
        client.post(
            "/api/file",
            json={"name": "capa.png", "mime_type": "image/png", "size": 1},
            headers=admin_headers,
        )
        response = client.request(
            "DELETE",
            "/api/file/bulk-remove",
            json={"files": ["capa.png"]},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json() == {"count": 1}
        assert client.get("/api/file").headers[TOTAL_COUNT_HEADER] == "0"


class TestContact:
    CONTACT = {"name": "Ana", "email": "ana@example.com", "message": "Quero ajudar"}

    def test_public_create(self, client):
        response = client.post("/api/contact", json=self.CONTACT)
        assert response.status_code == 201
        assert "field_id" not in response.json()

    def test_invalid_email(self, client):
        response = client.post("/api/contact", json={**self.CONTACT, "email": "not-an-email"})
        assert response.status_code == 422

    def test_admin_cannot_remove(self, client, admin_headers):
        created = client.post("/api/contact", json=self.CONTACT).json()
        response = client.delete(f"/api/contact/{created['id']}", headers=admin_headers)
        assert response.status_code == 403

    def test_web_master_removes(self, client, web_master_headers):
        created = client.post("/api/contact", json=self.CONTACT).json()
        response = client.delete(f"/api/contact/{created['id']}", headers=web_master_headers)
        assert response.status_code == 200
        assert response.json()["deleted"] is not None

    def test_no_update_route(self, client, web_master_headers):
        created = client.post("/api/contact", json=self.CONTACT).json()
        response = client.put(
            f"/api/contact/{created['id']}", json={"name": "x"}, headers=web_master_headers
        )
        assert response.status_code == 405


class TestMiddlewares:
    def test_security_headers(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_request_id_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_non_json_body_rejected(self, client, admin_headers):
        response = client.post(
            "/api/report",
            content="title=x",
            headers={**admin_headers, "Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 415

    @pytest.mark.parametrize("resource", ["church", "volunteer", "welcomed-family", "testimonial"])
    def test_every_resource_listed(self, client, resource):
        response = client.get(f"/api/{resource}")
        assert response.status_code == 200
        assert response.headers[TOTAL_COUNT_HEADER] == "0"
