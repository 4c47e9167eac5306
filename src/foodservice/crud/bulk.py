"""Bulk create/delete with per-item isolation.

Items run strictly one after another in the caller's session. Each item
commits on its own, so a later failure never undoes an earlier success.
Per-item problems end up in the result; only a malformed batch raises.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from src.foodservice.core.config import get_settings
from src.foodservice.core.logging import get_logger
from src.foodservice.crud import tenancy
from src.foodservice.crud.errors import (
    CrudError,
    HookError,
    NotFoundOrForbiddenError,
    ValidationError,
)
from src.foodservice.crud.operations import EntityService
from src.foodservice.schemas.bulk import (
    BulkCreateOptions,
    BulkDeleteOptions,
    BulkItemResult,
    BulkOperationResult,
)

logger = get_logger(__name__)

BULK_NOT_FOUND_MESSAGE = "Not found or access denied"


def _check_batch(field: str, items: Any) -> None:
    max_items = get_settings().crud_max_bulk_items
    if not isinstance(items, Sequence) or isinstance(items, str | bytes):
        raise ValidationError.single(field, "must be a list")
    if not items:
        raise ValidationError.single(field, "must contain at least one item")
    if len(items) > max_items:
        raise ValidationError.single(field, f"must contain at most {max_items} items")


def _describe(exc: CrudError) -> str:
    if isinstance(exc, ValidationError):
        return exc.summary() or exc.message
    if isinstance(exc, NotFoundOrForbiddenError):
        return BULK_NOT_FOUND_MESSAGE
    return exc.message


async def _run_item(
    service: EntityService,
    index: int,
    item_id: str | None,
    action: Callable[[], Awaitable[str]],
) -> tuple[BulkItemResult, Exception | None]:
    """Run one item; return its outcome and the error that failed it, if any."""
    try:
        record_id = await action()
    except HookError as e:
        if e.committed:
            # The write is persisted; only the side effect failed.
            return BulkItemResult(
                index=index, id=e.record_id or item_id, success=True, error=e.message
            ), None
        return BulkItemResult(index=index, id=item_id, success=False, error=e.message), e
    except CrudError as e:
        return BulkItemResult(index=index, id=item_id, success=False, error=_describe(e)), e
    except SQLAlchemyError as e:
        await service.session.rollback()
        logger.exception("Bulk item failed", entity=service.descriptor.name, index=index)
        return BulkItemResult(index=index, id=item_id, success=False, error="Storage error"), e
    return BulkItemResult(index=index, id=record_id, success=True), None


async def bulk_create(
    service: EntityService,
    rows: Sequence[Any],
    options: BulkCreateOptions | None = None,
) -> BulkOperationResult:
    """Create each row through ``service.create``.

    With ``skip_invalid_rows`` off, the first row failing validation ends the
    batch the same way ``stop_on_error`` does: the partial result is returned.

    Raises:
        ValidationError: ``rows`` is empty, not a list, or over the cap.
        TenantContextRequiredError: No caller for a tenant-scoped entity.
        PermissionDeniedError: The caller may not write this entity.
    """
    options = options or BulkCreateOptions()
    _check_batch("rows", rows)
    tenancy.ensure_can_write(service.descriptor, service.tenant)

    result = BulkOperationResult(total=len(rows))
    for index, row in enumerate(rows):

        async def create(row: Any = row) -> str:
            record = await service.create(row)
            return getattr(record, service.descriptor.identity_field)

        item, error = await _run_item(service, index, None, create)
        result.record(item)
        if error is None:
            continue
        if options.stop_on_error:
            break
        # Strict mode: the invalid row is reported, later rows are not attempted.
        if isinstance(error, ValidationError) and not options.skip_invalid_rows:
            break

    logger.info(
        "Bulk create finished",
        entity=service.descriptor.name,
        total=result.total,
        successful=result.successful,
        failed=result.failed,
    )
    return result


async def bulk_delete(
    service: EntityService,
    ids: Sequence[str],
    options: BulkDeleteOptions | None = None,
) -> BulkOperationResult:
    """Delete each id through ``service.delete``.

    An id that is missing or outside the caller's scope is reported as a
    failed item with a generic message.
    """
    options = options or BulkDeleteOptions()
    _check_batch("ids", ids)
    tenancy.ensure_can_write(service.descriptor, service.tenant)

    result = BulkOperationResult(total=len(ids))
    for index, record_id in enumerate(ids):

        async def delete(record_id: str = record_id) -> str:
            return (await service.delete(record_id)).id

        item, error = await _run_item(service, index, record_id, delete)
        result.record(item)
        if error is not None and options.stop_on_error:
            break

    logger.info(
        "Bulk delete finished",
        entity=service.descriptor.name,
        total=result.total,
        successful=result.successful,
        failed=result.failed,
    )
    return result
