"""Generic entity endpoints.

``build_entity_router`` turns one registered entity into the seven routes of
the CRUD surface. Bodies are taken as plain JSON objects and validated by the
engine against the contracts synthesized at registration, so a bad field is
reported as the engine's ValidationError (422) with per-field messages.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status

from src.foodservice.api.dependencies import DBSession, OptionalTenant
from src.foodservice.crud import (
    CrudEntity,
    NotFoundOrForbiddenError,
    bulk_create,
    bulk_delete,
)
from src.foodservice.schemas.bulk import (
    BulkCreateRequest,
    BulkDeleteRequest,
    BulkOperationResult,
)

ROUTE_OPERATIONS = frozenset(
    {"list", "get", "create", "update", "delete", "bulk_create", "bulk_delete"}
)


def build_entity_router(entity: CrudEntity, exclude: frozenset[str] = frozenset()) -> APIRouter:
    """Build the CRUD router for ``entity``, skipping operations in ``exclude``."""
    unknown = exclude - ROUTE_OPERATIONS
    if unknown:
        raise ValueError(f"Unknown operations: {sorted(unknown)}")

    descriptor = entity.descriptor
    label = descriptor.name.replace("-", " ")
    router = APIRouter(prefix=descriptor.url_path, tags=[descriptor.name])

    if "list" not in exclude:

        @router.get("", summary=f"List {label}")
        async def list_records(
            session: DBSession,
            tenant: OptionalTenant,
            limit: Annotated[int | None, Query(description="Max items to return")] = None,
            offset: Annotated[int, Query(description="Items to skip")] = 0,
        ) -> list[Any]:
            return await entity.service(session, tenant).list(limit=limit, offset=offset)

    if "bulk_create" not in exclude:

        @router.post("/bulk", summary=f"Bulk create {label}")
        async def bulk_create_records(
            request: BulkCreateRequest,
            session: DBSession,
            tenant: OptionalTenant,
        ) -> BulkOperationResult:
            service = entity.service(session, tenant)
            return await bulk_create(service, request.rows, request.options)

    if "bulk_delete" not in exclude:

        @router.post("/bulk-delete", summary=f"Bulk delete {label}")
        async def bulk_delete_records(
            request: BulkDeleteRequest,
            session: DBSession,
            tenant: OptionalTenant,
        ) -> BulkOperationResult:
            service = entity.service(session, tenant)
            return await bulk_delete(service, request.ids, request.options)

    if "get" not in exclude:

        @router.get(
            "/{record_id}",
            summary=f"Get one of {label}",
            responses={404: {"description": "Record not found or access denied"}},
        )
        async def get_record(record_id: str, session: DBSession, tenant: OptionalTenant) -> Any:
            record = await entity.service(session, tenant).get(record_id)
            if record is None:
                raise NotFoundOrForbiddenError(descriptor.name, record_id)
            return record

    if "create" not in exclude:

        @router.post("", status_code=status.HTTP_201_CREATED, summary=f"Create {label}")
        async def create_record(
            payload: Annotated[dict[str, Any], Body()],
            session: DBSession,
            tenant: OptionalTenant,
        ) -> Any:
            return await entity.service(session, tenant).create(payload)

    if "update" not in exclude:

        @router.patch(
            "/{record_id}",
            summary=f"Update one of {label}",
            responses={404: {"description": "Record not found or access denied"}},
        )
        async def update_record(
            record_id: str,
            payload: Annotated[dict[str, Any], Body()],
            session: DBSession,
            tenant: OptionalTenant,
        ) -> Any:
            return await entity.service(session, tenant).update(record_id, payload)

    if "delete" not in exclude:

        @router.delete(
            "/{record_id}",
            summary=f"Delete one of {label}",
            responses={404: {"description": "Record not found or access denied"}},
        )
        async def delete_record(
            record_id: str, session: DBSession, tenant: OptionalTenant
        ) -> dict[str, Any]:
            result = await entity.service(session, tenant).delete(record_id)
            return {"success": result.success, "id": result.id}

    return router
