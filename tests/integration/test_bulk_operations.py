"""Bulk operations against a real database: per-item commits and isolation."""

import pytest
from sqlalchemy import func
from sqlmodel import select

from src.foodservice.crud import bulk_create, bulk_delete
from src.foodservice.models import Vendor
from src.foodservice.schemas.bulk import BulkCreateOptions

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


def vendor_row(name: str, **overrides) -> dict:
    return {"vendor_name": name, "vendor_type": "Dairy", "phone": "555-0142", **overrides}


async def stored_vendor_names(session) -> list[str]:
    result = await session.execute(select(Vendor.vendor_name).order_by(Vendor.vendor_name))
    return list(result.scalars().all())


async def test_invalid_rows_do_not_block_valid_ones(registry, db_session, ctx_a):
    rows = [
        vendor_row("Alpha Dairy"),
        {"vendor_name": "No Phone", "vendor_type": "Dairy"},
        vendor_row("Bravo Dairy"),
        vendor_row("Bad Type", vendor_type="Spaceship"),
        vendor_row("Charlie Dairy"),
    ]
    service = registry.get("vendors").service(db_session, ctx_a)

    result = await bulk_create(service, rows)

    assert (result.total, result.successful, result.failed) == (5, 3, 2)
    assert [r.index for r in result.results if not r.success] == [1, 3]
    assert "phone" in result.results[1].error
    assert await stored_vendor_names(db_session) == ["Alpha Dairy", "Bravo Dairy", "Charlie Dairy"]


async def test_stop_on_error_keeps_earlier_rows(registry, db_session, ctx_a):
    rows = [vendor_row("Alpha Dairy"), {"vendor_name": "Broken"}, vendor_row("Bravo Dairy")]
    service = registry.get("vendors").service(db_session, ctx_a)

    result = await bulk_create(service, rows, BulkCreateOptions(stop_on_error=True))

    assert len(result.results) == 2
    assert await stored_vendor_names(db_session) == ["Alpha Dairy"]


async def test_conflicting_row_isolated(registry, db_session, admin_a):
    rows = [
        {"unit_name": "Ounce", "unit_abbreviation": "oz", "unit_type": "Weight"},
        {"unit_name": "Ounce", "unit_abbreviation": "oz", "unit_type": "Weight"},
        {"unit_name": "Gallon", "unit_abbreviation": "gal", "unit_type": "Volume"},
    ]
    service = registry.get("units").service(db_session, admin_a)

    result = await bulk_create(service, rows)

    assert [r.success for r in result.results] == [True, False, True]
    assert len(await service.list()) == 2


async def test_bulk_delete_mixed_ownership(registry, db_session, ctx_a, ctx_b):
    vendors_a = registry.get("vendors").service(db_session, ctx_a)
    vendors_b = registry.get("vendors").service(db_session, ctx_b)
    own_1 = (await vendors_a.create(vendor_row("Alpha Dairy"))).vendor_id
    own_2 = (await vendors_a.create(vendor_row("Bravo Dairy"))).vendor_id
    theirs = (await vendors_b.create(vendor_row("Other Tenant Dairy"))).vendor_id

    result = await bulk_delete(vendors_a, [own_1, theirs, "VND-nonexistent", own_2])

    assert (result.successful, result.failed) == (2, 2)
    assert result.results[1].error == result.results[2].error == "Not found or access denied"
    assert await stored_vendor_names(db_session) == ["Other Tenant Dairy"]


async def test_bulk_delete_counts_rows(registry, db_session, ctx_a):
    service = registry.get("vendors").service(db_session, ctx_a)
    ids = [(await service.create(vendor_row(f"Dairy {n}"))).vendor_id for n in range(4)]

    result = await bulk_delete(service, ids)

    count = await db_session.execute(select(func.count()).select_from(Vendor))
    assert result.successful == 4
    assert count.scalar_one() == 0
