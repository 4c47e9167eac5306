"""Tests for the bulk executor with a stubbed entity service."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from src.foodservice.crud import (
    HookError,
    NotFoundOrForbiddenError,
    PermissionDeniedError,
    TenantContext,
    ValidationError,
    bulk_create,
    bulk_delete,
)
from src.foodservice.crud.bulk import BULK_NOT_FOUND_MESSAGE
from src.foodservice.crud.operations import DeleteResult
from src.foodservice.models.enums import UserRole
from src.foodservice.schemas.bulk import BulkCreateOptions, BulkDeleteOptions

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


class FakeVendorService:
    """Stands in for EntityService: rows with ``"bad"`` set fail validation."""

    def __init__(self, registry, role: UserRole = UserRole.MANAGER):
        self.descriptor = registry.get("vendors").descriptor
        self.tenant = TenantContext(tenant_id="TEN-A", role=role)
        self.session = AsyncMock()
        self.created: list[str] = []
        self.deleted: list[str] = []

    async def create(self, row):
        if row.get("bad"):
            raise ValidationError({"vendor_name": ["Field required"]})
        if row.get("hook_fails"):
            raise HookError("after_create", RuntimeError("rollup"), committed=True, record_id="VND-H")
        if row.get("storage_fails"):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))
        record_id = f"VND-{len(self.created)}"
        self.created.append(record_id)
        return type("Row", (), {"vendor_id": record_id})()

    async def delete(self, record_id):
        if record_id == "NOPE":
            raise NotFoundOrForbiddenError("vendors", record_id)
        self.deleted.append(record_id)
        return DeleteResult(id=record_id)


class TestBulkCreate:
    async def test_partial_failure_continues(self, registry):
        service = FakeVendorService(registry)
        rows = [{}, {"bad": True}, {}, {"bad": True}, {}]

        result = await bulk_create(service, rows)

        assert (result.total, result.successful, result.failed) == (5, 3, 2)
        assert [r.success for r in result.results] == [True, False, True, False, True]
        assert result.results[1].error == "vendor_name: Field required"
        assert len(service.created) == 3

    async def test_stop_on_error_returns_partial_result(self, registry):
        service = FakeVendorService(registry)
        rows = [{}, {"bad": True}, {}]

        result = await bulk_create(service, rows, BulkCreateOptions(stop_on_error=True))

        assert result.total == 3
        assert len(result.results) == 2
        assert (result.successful, result.failed) == (1, 1)
        assert len(service.created) == 1

    async def test_invalid_row_stops_batch_when_not_skipping(self, registry):
        service = FakeVendorService(registry)
        result = await bulk_create(
            service, [{"bad": True}, {}], BulkCreateOptions(skip_invalid_rows=False)
        )
        assert len(result.results) == 1
        assert service.created == []

    async def test_committed_hook_failure_counts_as_success(self, registry):
        service = FakeVendorService(registry)
        result = await bulk_create(service, [{"hook_fails": True}])
        item = result.results[0]
        assert item.success
        assert item.id == "VND-H"
        assert "after_create hook failed" in item.error

    async def test_storage_error_rolls_back_and_continues(self, registry):
        service = FakeVendorService(registry)
        result = await bulk_create(service, [{"storage_fails": True}, {}])
        assert [r.success for r in result.results] == [False, True]
        assert result.results[0].error == "Storage error"
        service.session.rollback.assert_awaited_once()

    @pytest.mark.parametrize("rows", [[], "not-a-list", [{}] * 501])
    async def test_malformed_batch_raises(self, registry, rows):
        with pytest.raises(ValidationError) as exc_info:
            await bulk_create(FakeVendorService(registry), rows)
        assert "rows" in exc_info.value.errors

    async def test_viewer_rejected_before_any_row(self, registry):
        service = FakeVendorService(registry, role=UserRole.VIEWER)
        with pytest.raises(PermissionDeniedError):
            await bulk_create(service, [{}])
        assert service.created == []


class TestBulkDelete:
    async def test_missing_id_reported_per_item(self, registry):
        """Scenario: two existing ids and one unknown."""
        service = FakeVendorService(registry)

        result = await bulk_delete(service, ["VND-A", "VND-B", "NOPE"])

        assert (result.successful, result.failed) == (2, 1)
        nope = result.results[2]
        assert nope.id == "NOPE"
        assert not nope.success
        assert nope.error == BULK_NOT_FOUND_MESSAGE
        assert service.deleted == ["VND-A", "VND-B"]

    async def test_stop_on_error(self, registry):
        service = FakeVendorService(registry)
        result = await bulk_delete(
            service, ["NOPE", "VND-A"], BulkDeleteOptions(stop_on_error=True)
        )
        assert len(result.results) == 1
        assert service.deleted == []

    async def test_empty_ids_rejected(self, registry):
        with pytest.raises(ValidationError):
            await bulk_delete(FakeVendorService(registry), [])

    async def test_summary_logged(self, registry, capturing_logger):
        await bulk_delete(FakeVendorService(registry), ["VND-A"])
        summary = [
            c.kwargs for c in capturing_logger.calls if c.kwargs["event"] == "Bulk delete finished"
        ]
        assert summary == [
            {
                "event": "Bulk delete finished",
                "entity": "vendors",
                "total": 1,
                "successful": 1,
                "failed": 0,
            }
        ]
