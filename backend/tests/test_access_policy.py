"""
Tests for the field-scoped access policy.

Pure decisions over already-fetched rows: no database needed.
"""

import pytest

from rest_api.models import Report
from rest_api.services.crud.policy import AccessPolicy
from rest_api.services.crud.registry import get_resource
from shared.config.constants import Limits, Messages, Role
from shared.security.principal import Principal
from shared.utils.exceptions import ForbiddenError, NotFoundError, ValidationError


F1 = "field-1"
F2 = "field-2"

VOLUNTEER = Principal(id="u1", role=Role.VOLUNTEER, field_id=F1)
ADMIN = Principal(id="u2", role=Role.ADMIN, field_id=F1)
WEB_MASTER = Principal(id="u3", role=Role.WEB_MASTER)


@pytest.fixture
def policy():
    return AccessPolicy(get_resource("report"))


@pytest.fixture
def contact_policy():
    return AccessPolicy(get_resource("contact"))


def _report(report_id: str, field_id: str) -> Report:
    return Report(id=report_id, field_id=field_id, title="t", short_description="s", year=2024)


class TestPrepareCreate:
    """Create-time field rule."""

    def test_field_forced_to_principal(self, policy):
        """Non-WEB_MASTER creates always land in the principal's field."""
        data = policy.prepare_create(VOLUNTEER, {"title": "x", "field_id": F2})
        assert data["field_id"] == F1

    def test_field_injected_when_missing(self, policy):
        """A payload without field gets the principal's."""
        data = policy.prepare_create(ADMIN, {"title": "x"})
        assert data["field_id"] == F1

    def test_web_master_must_name_field(self, policy):
        """WEB_MASTER without field is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            policy.prepare_create(WEB_MASTER, {"title": "x"})
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "field não deve estar vazio"

    def test_web_master_field_kept(self, policy):
        """WEB_MASTER's explicit field is persisted as given."""
        data = policy.prepare_create(WEB_MASTER, {"title": "x", "field_id": F2})
        assert data["field_id"] == F2

    def test_protected_keys_stripped(self, policy):
        """Clients cannot set identity or lifecycle columns."""
        data = policy.prepare_create(
            ADMIN,
            {"title": "x", "id": "forged", "deleted": "2024-01-01", "created_at": "2020-01-01"},
        )
        assert "id" not in data
        assert "deleted" not in data
        assert "created_at" not in data

    def test_unscoped_resource_drops_field(self, contact_policy):
        """Contacts belong to no field."""
        data = contact_policy.prepare_create(WEB_MASTER, {"name": "x", "field_id": F1})
        assert "field_id" not in data


class TestPrepareUpdate:
    """Update-time field rule."""

    def test_field_stripped_for_non_web_master(self, policy):
        """Only WEB_MASTER may move a record between fields."""
        data = policy.prepare_update(ADMIN, {"title": "y", "field_id": F2})
        assert data == {"title": "y"}

    def test_web_master_reassigns_field(self, policy):
        data = policy.prepare_update(WEB_MASTER, {"field_id": F2})
        assert data == {"field_id": F2}

    def test_web_master_null_field_ignored(self, policy):
        """A null field never clears ownership."""
        data = policy.prepare_update(WEB_MASTER, {"title": "y", "field_id": None})
        assert data == {"title": "y"}

    def test_null_clears_nullable_column(self, policy):
        data = policy.prepare_update(ADMIN, {"text": None, "month": None})
        assert data == {"text": None, "month": None}

    def test_null_on_required_column_rejected(self, policy):
        with pytest.raises(ValidationError) as exc_info:
            policy.prepare_update(ADMIN, {"title": None})
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "title não deve estar vazio"


class TestAuthorize:
    """Single-record existence and ownership checks."""

    def test_missing_entity_is_not_found(self, policy):
        """Absence is reported before ownership."""
        with pytest.raises(NotFoundError) as exc_info:
            policy.authorize(VOLUNTEER, None, action="update", entity_id="r1")
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "relatório não encontrado"

    def test_web_master_missing_entity_is_not_found(self, policy):
        """WEB_MASTER is exempt from ownership, not from existence."""
        with pytest.raises(NotFoundError):
            policy.authorize(WEB_MASTER, None, action="remove", entity_id="r1")

    def test_foreign_entity_is_forbidden(self, policy):
        with pytest.raises(ForbiddenError) as exc_info:
            policy.authorize(ADMIN, _report("r1", F2), action="update", entity_id="r1")
        assert exc_info.value.status_code == 403

    def test_own_entity_allowed(self, policy):
        entity = _report("r1", F1)
        assert policy.authorize(VOLUNTEER, entity, action="update", entity_id="r1") is entity

    def test_web_master_any_field(self, policy):
        entity = _report("r1", F2)
        assert policy.authorize(WEB_MASTER, entity, action="remove", entity_id="r1") is entity


class TestBatch:
    """Batch id validation and all-or-nothing authorization."""

    def test_empty_ids_rejected(self, policy):
        with pytest.raises(ValidationError) as exc_info:
            policy.check_ids([])
        assert exc_info.value.detail == Messages.EMPTY_IDS

    def test_duplicate_ids_collapsed(self, policy):
        assert policy.check_ids(["a", "b", "a"]) == ["a", "b"]

    def test_too_many_ids_rejected(self, policy):
        ids = [str(n) for n in range(Limits.MAX_BATCH_IDS + 1)]
        with pytest.raises(ValidationError):
            policy.check_ids(ids)

    def test_missing_id_rejects_batch(self, policy):
        """Plural not-found message when any id is absent."""
        with pytest.raises(NotFoundError) as exc_info:
            policy.authorize_batch(ADMIN, ["r1", "r2"], [_report("r1", F1)], action="restore")
        assert exc_info.value.detail == "relatórios não encontrados"

    def test_one_foreign_rejects_batch(self, policy):
        """A single foreign row makes the entire batch forbidden."""
        entities = [_report("r1", F1), _report("r2", F2)]
        with pytest.raises(ForbiddenError):
            policy.authorize_batch(ADMIN, ["r1", "r2"], entities, action="hard_remove")

    def test_web_master_mixed_fields_allowed(self, policy):
        entities = [_report("r1", F1), _report("r2", F2)]
        assert policy.authorize_batch(WEB_MASTER, ["r1", "r2"], entities, action="restore") == entities


class TestRoleGate:
    """WEB_MASTER-only resources."""

    def test_non_web_master_forbidden(self, contact_policy):
        for principal in (VOLUNTEER, ADMIN):
            with pytest.raises(ForbiddenError):
                contact_policy.check_role(principal, "remove")

    def test_web_master_allowed(self, contact_policy):
        contact_policy.check_role(WEB_MASTER, "remove")

    def test_regular_resource_open_to_every_role(self, policy):
        policy.check_role(VOLUNTEER, "update")
