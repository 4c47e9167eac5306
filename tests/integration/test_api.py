"""HTTP surface tests: tenant headers, status mapping, and the domain routes."""

import pytest
from httpx import AsyncClient

from src.foodservice.models.enums import TenantStatus, UserRole
from tests.factories import FoodCategoryFactory, IngredientFactory, UnitOfMeasureFactory
from tests.helpers import create_tenant_with_site, headers_for

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

VENDOR = {"vendor_name": "Harbor Seafood", "vendor_type": "Seafood", "phone": "555-0199"}


async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "healthy"}


async def test_metrics_exposed(client: AsyncClient):
    await client.get("/health")
    response = await client.get("/metrics")
    assert response.status_code == 200


class TestTenantHeaders:
    async def test_public_reference_needs_no_headers(self, client: AsyncClient):
        response = await client.get("/api/v1/allergens")

        assert response.status_code == 200
        assert response.json() == []

    async def test_tenant_entity_needs_headers(self, client: AsyncClient):
        response = await client.get("/api/v1/vendors")

        assert response.status_code == 401
        assert response.json()["detail"] == "Tenant context required"

    async def test_unknown_tenant(self, client: AsyncClient):
        response = await client.get("/api/v1/vendors", headers={"X-Tenant-ID": "TEN-missing"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Unknown tenant"

    async def test_suspended_tenant(self, client: AsyncClient, db_session):
        tenant, _ = await create_tenant_with_site(
            db_session, tenant_code="SUSP", status=TenantStatus.SUSPENDED
        )
        response = await client.get("/api/v1/vendors", headers=headers_for(tenant))

        assert response.status_code == 403
        assert response.json()["detail"] == "Tenant is Suspended"

    async def test_invalid_role(self, client: AsyncClient, tenant_a):
        headers = {**headers_for(tenant_a[0]), "X-User-Role": "superuser"}
        response = await client.get("/api/v1/vendors", headers=headers)
        assert response.status_code == 401

    async def test_viewer_cannot_write(self, client: AsyncClient, tenant_a):
        response = await client.post(
            "/api/v1/vendors", json=VENDOR, headers=headers_for(tenant_a[0], UserRole.VIEWER)
        )
        assert response.status_code == 403

    async def test_missing_role_means_viewer(self, client: AsyncClient, tenant_a):
        headers = {"X-Tenant-ID": tenant_a[0].tenant_id}
        assert (await client.get("/api/v1/vendors", headers=headers)).status_code == 200
        assert (await client.post("/api/v1/vendors", json=VENDOR, headers=headers)).status_code == 403


class TestEntityRoutes:
    async def test_lifecycle(self, client: AsyncClient, tenant_a):
        headers = headers_for(tenant_a[0])

        created = await client.post("/api/v1/vendors", json=VENDOR, headers=headers)
        assert created.status_code == 201
        vendor_id = created.json()["vendor_id"]
        assert created.json()["tenant_id"] == tenant_a[0].tenant_id

        fetched = await client.get(f"/api/v1/vendors/{vendor_id}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["vendor_name"] == VENDOR["vendor_name"]

        patched = await client.patch(
            f"/api/v1/vendors/{vendor_id}", json={"contact_name": "Rosa"}, headers=headers
        )
        assert patched.status_code == 200
        assert patched.json()["contact_name"] == "Rosa"

        deleted = await client.delete(f"/api/v1/vendors/{vendor_id}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "id": vendor_id}

        gone = await client.get(f"/api/v1/vendors/{vendor_id}", headers=headers)
        assert gone.status_code == 404

    async def test_cross_tenant_looks_like_missing(
        self, client: AsyncClient, tenant_a, tenant_b
    ):
        created = await client.post(
            "/api/v1/vendors", json=VENDOR, headers=headers_for(tenant_a[0])
        )
        vendor_id = created.json()["vendor_id"]

        foreign = await client.get(f"/api/v1/vendors/{vendor_id}", headers=headers_for(tenant_b[0]))
        missing = await client.get("/api/v1/vendors/VND-nothere", headers=headers_for(tenant_b[0]))

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json()["detail"] == missing.json()["detail"] == (
            "Record not found or access denied"
        )

    async def test_validation_errors_per_field(self, client: AsyncClient, tenant_a):
        response = await client.post(
            "/api/v1/vendors",
            json={"vendor_name": "No Phone", "vendor_type": "Dairy", "color": "blue"},
            headers=headers_for(tenant_a[0]),
        )

        body = response.json()
        assert response.status_code == 422
        assert body["detail"] == "Validation failed"
        assert set(body["errors"]) == {"phone", "color"}

    async def test_error_carries_request_id(self, client: AsyncClient):
        response = await client.get("/api/v1/vendors")

        assert response.json()["request_id"] == response.headers["x-request-id"]

    async def test_list_limit_out_of_range(self, client: AsyncClient, tenant_a):
        response = await client.get(
            "/api/v1/vendors", params={"limit": 1000}, headers=headers_for(tenant_a[0])
        )
        assert response.status_code == 422
        assert "limit" in response.json()["errors"]

    async def test_duplicate_reference_is_conflict(self, client: AsyncClient, tenant_a):
        headers = headers_for(tenant_a[0], UserRole.ADMIN)
        payload = {"allergen_name": "Mustard"}

        first = await client.post("/api/v1/allergens", json=payload, headers=headers)
        second = await client.post("/api/v1/allergens", json=payload, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 409

    async def test_bulk_routes(self, client: AsyncClient, tenant_a):
        headers = headers_for(tenant_a[0])
        created = await client.post(
            "/api/v1/vendors/bulk",
            json={"rows": [VENDOR, {"vendor_name": "Incomplete"}]},
            headers=headers,
        )
        body = created.json()
        assert created.status_code == 200
        assert (body["total"], body["successful"], body["failed"]) == (2, 1, 1)

        new_id = body["results"][0]["id"]
        deleted = await client.post(
            "/api/v1/vendors/bulk-delete",
            json={"ids": [new_id, "VND-nothere"]},
            headers=headers,
        )
        assert deleted.json()["successful"] == 1
        assert deleted.json()["results"][1]["error"] == "Not found or access denied"

    async def test_empty_bulk_rejected(self, client: AsyncClient, tenant_a):
        response = await client.post(
            "/api/v1/vendors/bulk-delete", json={"ids": []}, headers=headers_for(tenant_a[0])
        )
        assert response.status_code == 422


class TestDinerRoutes:
    async def test_admission_to_discharge(self, client: AsyncClient, tenant_a, system_diets):
        tenant, site = tenant_a
        headers = headers_for(tenant)
        regular = system_diets["REGULAR"].diet_type_id
        diabetic = system_diets["DIABETIC"].diet_type_id

        admitted = await client.post(
            "/api/v1/diners",
            json={
                "first_name": "Lin",
                "last_name": "Park",
                "site_id": site.site_id,
                "diner_type": "Resident",
                "admission_date": "2026-02-01",
                "primary_diet_type_id": regular,
            },
            headers=headers,
        )
        assert admitted.status_code == 201
        diner_id = admitted.json()["diner_id"]

        changed = await client.post(
            f"/api/v1/diners/{diner_id}/diet",
            json={"diet_type_id": diabetic, "effective_date": "2026-02-10", "ordered_by": "RD Chen"},
            headers=headers,
        )
        assert changed.status_code == 201
        assert changed.json()["end_date"] is None

        history = await client.get(f"/api/v1/diners/{diner_id}/diet-history", headers=headers)
        assert [(a["diet_type_id"], a["end_date"]) for a in history.json()] == [
            (diabetic, None),
            (regular, "2026-02-10"),
        ]

        discharged = await client.post(
            f"/api/v1/diners/{diner_id}/discharge", json={"as_of": "2026-03-01"}, headers=headers
        )
        assert discharged.status_code == 200
        assert discharged.json()["status"] == "Discharged"

        counts = await client.get("/api/v1/diners/counts", headers=headers)
        assert counts.json() == {
            "counts": {"Active": 0, "Discharged": 1, "On Leave": 0},
            "total": 1,
        }

        fetched = await client.get(f"/api/v1/diners/{diner_id}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["primary_diet_type_id"] == diabetic

    async def test_backdated_diet_change(self, client: AsyncClient, tenant_a, system_diets):
        tenant, site = tenant_a
        headers = headers_for(tenant)
        admitted = await client.post(
            "/api/v1/diners",
            json={
                "first_name": "Lin",
                "last_name": "Park",
                "site_id": site.site_id,
                "diner_type": "Patient",
                "admission_date": "2026-02-01",
                "primary_diet_type_id": system_diets["REGULAR"].diet_type_id,
            },
            headers=headers,
        )
        response = await client.post(
            f"/api/v1/diners/{admitted.json()['diner_id']}/diet",
            json={
                "diet_type_id": system_diets["DIABETIC"].diet_type_id,
                "effective_date": "2026-01-15",
                "ordered_by": "RD Chen",
            },
            headers=headers,
        )
        assert response.status_code == 422
        assert "effective_date" in response.json()["errors"]

    async def test_malformed_admission(self, client: AsyncClient, tenant_a):
        response = await client.post(
            "/api/v1/diners", json={"first_name": "Lin"}, headers=headers_for(tenant_a[0])
        )
        assert response.status_code == 422
        assert "errors" in response.json()

    async def test_other_tenant_history_hidden(
        self, client: AsyncClient, tenant_a, tenant_b, system_diets
    ):
        tenant, site = tenant_a
        admitted = await client.post(
            "/api/v1/diners",
            json={
                "first_name": "Lin",
                "last_name": "Park",
                "site_id": site.site_id,
                "diner_type": "Patient",
                "primary_diet_type_id": system_diets["REGULAR"].diet_type_id,
            },
            headers=headers_for(tenant),
        )
        response = await client.get(
            f"/api/v1/diners/{admitted.json()['diner_id']}/diet-history",
            headers=headers_for(tenant_b[0]),
        )
        assert response.status_code == 404

    async def test_diners_have_no_generic_bulk_create(self, client: AsyncClient, tenant_a):
        response = await client.post(
            "/api/v1/diners/bulk", json={"rows": [{}]}, headers=headers_for(tenant_a[0])
        )
        assert response.status_code == 405


class TestPurchaseOrderRoutes:
    async def test_workflow(self, client: AsyncClient, db_session, tenant_a):
        tenant, site = tenant_a
        headers = headers_for(tenant)
        unit = UnitOfMeasureFactory.build()
        category = FoodCategoryFactory.build()
        db_session.add_all([unit, category])
        await db_session.flush()
        ingredient = IngredientFactory.build(
            tenant_id=None, food_category_id=category.category_id, common_unit=unit.unit_id
        )
        db_session.add(ingredient)
        await db_session.commit()

        vendor = await client.post("/api/v1/vendors", json=VENDOR, headers=headers)
        order = await client.post(
            "/api/v1/purchase-orders",
            json={
                "vendor_id": vendor.json()["vendor_id"],
                "site_id": site.site_id,
                "order_date": "2026-03-02",
                "requested_delivery_date": "2026-03-04",
                "ordered_by": "buyer@alpha.example.com",
            },
            headers=headers,
        )
        assert order.status_code == 201
        po_number = order.json()["po_number"]

        empty = await client.post(f"/api/v1/purchase-orders/{po_number}/submit", headers=headers)
        assert empty.status_code == 409

        line = await client.post(
            "/api/v1/po-line-items",
            json={
                "po_number": po_number,
                "ingredient_id": ingredient.ingredient_id,
                "quantity_ordered": 3,
                "unit_of_measure": unit.unit_id,
                "unit_price": 2.5,
            },
            headers=headers,
        )
        assert line.status_code == 201

        submitted = await client.post(
            f"/api/v1/purchase-orders/{po_number}/submit", headers=headers
        )
        assert submitted.status_code == 200
        assert submitted.json()["status"] == "Submitted"
        assert submitted.json()["total"] == 7.5

        locked = await client.delete(
            f"/api/v1/po-line-items/{line.json()['line_item_id']}", headers=headers
        )
        assert locked.status_code == 409

        reopened = await client.patch(
            f"/api/v1/purchase-orders/{po_number}", json={"status": "Draft"}, headers=headers
        )
        assert reopened.status_code == 422

        cancelled = await client.post(
            f"/api/v1/purchase-orders/{po_number}/cancel",
            json={"reason": "Menu changed"},
            headers=headers,
        )
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "Cancelled"
        assert cancelled.json()["notes"] == "Cancelled: Menu changed"

    async def test_foreign_order_is_not_found(self, client: AsyncClient, tenant_a):
        response = await client.post(
            "/api/v1/purchase-orders/PO-MISSING/confirm", headers=headers_for(tenant_a[0])
        )
        assert response.status_code == 404
