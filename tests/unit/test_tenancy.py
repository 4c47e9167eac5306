"""Tests for tenant predicates, stamping, and access checks."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.foodservice.crud import (
    PermissionDeniedError,
    TenantContext,
    TenantContextRequiredError,
)
from src.foodservice.crud import tenancy
from src.foodservice.entities import build_registry
from src.foodservice.models.enums import UserRole

pytestmark = pytest.mark.unit

REGISTRY = build_registry()

tenant_ids = st.from_regex(r"^TEN-[0-9A-Za-z]{10}$", fullmatch=True)


def _sql(conditions) -> list[str]:
    return [str(c.compile(compile_kwargs={"literal_binds": True})) for c in conditions]


def _ctx(tenant_id: str = "TEN-A", role: UserRole = UserRole.MANAGER) -> TenantContext:
    return TenantContext(tenant_id=tenant_id, role=role)


class TestReadConditions:
    def test_required_mode_matches_caller(self, registry):
        sql = _sql(tenancy.read_conditions(registry.get("vendors").descriptor, _ctx()))
        assert sql == ["vendors.tenant_id = 'TEN-A'"]

    def test_optional_mode_includes_shared_rows(self, registry):
        sql = _sql(tenancy.read_conditions(registry.get("diet-types").descriptor, _ctx()))
        assert len(sql) == 1
        assert "diet_types.tenant_id IS NULL" in sql[0]
        assert "diet_types.tenant_id = 'TEN-A'" in sql[0]

    def test_optional_mode_anonymous_sees_shared_only(self, registry):
        sql = _sql(tenancy.read_conditions(registry.get("diet-types").descriptor, None))
        assert sql == ["diet_types.tenant_id IS NULL"]

    def test_none_mode_has_no_predicate(self, registry):
        assert tenancy.read_conditions(registry.get("allergens").descriptor, None) == []

    def test_parent_scope_ties_rows_to_owned_parent(self, registry):
        sql = _sql(tenancy.read_conditions(registry.get("stations").descriptor, _ctx()))
        assert len(sql) == 1
        assert sql[0].startswith("stations.site_id IN (SELECT sites.site_id")
        assert "sites.tenant_id = 'TEN-A'" in sql[0]

    def test_required_mode_without_context(self, registry):
        with pytest.raises(TenantContextRequiredError):
            tenancy.read_conditions(registry.get("vendors").descriptor, None)

    @given(tenant_id=tenant_ids)
    def test_required_predicate_always_names_caller(self, tenant_id: str):
        """Containment: the only tenant a required entity can match is the caller's."""
        registry = REGISTRY
        for name in ("sites", "employees", "vendors", "purchase-orders", "diners"):
            descriptor = registry.get(name).descriptor
            sql = _sql(tenancy.read_conditions(descriptor, _ctx(tenant_id)))
            assert sql == [f"{descriptor.model.__tablename__}.tenant_id = '{tenant_id}'"]


class TestWriteConditions:
    def test_optional_mode_drops_shared_branch(self, registry):
        sql = _sql(tenancy.write_conditions(registry.get("diet-types").descriptor, _ctx()))
        assert sql == ["diet_types.tenant_id = 'TEN-A'"]

    def test_write_without_context(self, registry):
        with pytest.raises(TenantContextRequiredError):
            tenancy.write_conditions(registry.get("ingredients").descriptor, None)


class TestStamp:
    def test_stamps_tenant_field(self, registry):
        assert tenancy.stamp(registry.get("vendors").descriptor, _ctx()) == {"tenant_id": "TEN-A"}
        assert tenancy.stamp(registry.get("meal-periods").descriptor, _ctx()) == {
            "tenant_id": "TEN-A"
        }

    def test_none_mode_stamps_nothing(self, registry):
        assert tenancy.stamp(registry.get("units").descriptor, _ctx()) == {}


class TestAccessChecks:
    def test_anonymous_may_read_public_reference(self, registry):
        tenancy.ensure_can_read(registry.get("allergens").descriptor, None)

    @pytest.mark.parametrize("name", ["vendors", "stations", "po-line-items"])
    def test_anonymous_may_not_read_protected(self, registry, name: str):
        with pytest.raises(TenantContextRequiredError):
            tenancy.ensure_can_read(registry.get(name).descriptor, None)

    def test_viewer_is_read_only(self, registry):
        with pytest.raises(PermissionDeniedError):
            tenancy.ensure_can_write(
                registry.get("vendors").descriptor, _ctx(role=UserRole.VIEWER)
            )

    @pytest.mark.parametrize("role", [UserRole.MANAGER, UserRole.STAFF])
    def test_reference_data_needs_admin(self, registry, role: UserRole):
        with pytest.raises(PermissionDeniedError):
            tenancy.ensure_can_write(registry.get("allergens").descriptor, _ctx(role=role))

    def test_admin_may_write_reference_data(self, registry):
        tenancy.ensure_can_write(registry.get("allergens").descriptor, _ctx(role=UserRole.ADMIN))

    def test_staff_may_write_tenant_data(self, registry):
        tenancy.ensure_can_write(registry.get("vendors").descriptor, _ctx(role=UserRole.STAFF))

    def test_anonymous_may_not_write(self, registry):
        with pytest.raises(TenantContextRequiredError):
            tenancy.ensure_can_write(registry.get("allergens").descriptor, None)


def test_actor_prefers_email():
    assert _ctx().actor == "manager@TEN-A"
    ctx = TenantContext(tenant_id="TEN-A", user_email="chef@example.com")
    assert ctx.actor == "chef@example.com"
