"""Diner endpoints that keep the diet history consistent.

Get, update and delete of a single diner go through the generic entity
routes; admission, diet changes and discharge are here.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Query, status

from src.foodservice.api.dependencies import DinerServiceDep
from src.foodservice.schemas.diner import (
    DietAssignmentRead,
    DietChange,
    DietChangeBody,
    DinerCounts,
    DinerCreate,
    DinerListFilter,
    DinerRead,
    DischargeRequest,
)

router = APIRouter(prefix="/diners", tags=["diners"])


@router.get(
    "",
    response_model=list[DinerRead],
    summary="List diners",
    description="List the tenant's diners, filtered by site, status, type, or name.",
)
async def list_diners(
    service: DinerServiceDep,
    filters: Annotated[DinerListFilter, Query()],
) -> list[DinerRead]:
    diners = await service.list(filters)
    return [DinerRead.model_validate(d) for d in diners]


@router.post(
    "",
    response_model=DinerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Admit diner",
    description="Create a diner together with the initial diet assignment.",
    responses={
        201: {"description": "Diner created"},
        422: {"description": "Invalid input, unknown site or diet type"},
    },
)
async def create_diner(request: DinerCreate, service: DinerServiceDep) -> DinerRead:
    diner = await service.create(request)
    return DinerRead.model_validate(diner)


@router.get(
    "/counts",
    response_model=DinerCounts,
    summary="Diner counts by status",
)
async def get_diner_counts(service: DinerServiceDep) -> DinerCounts:
    counts = await service.get_counts_by_status()
    total = counts.pop("total")
    return DinerCounts(counts=counts, total=total)


@router.post(
    "/{diner_id}/diet",
    response_model=DietAssignmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Change diet",
    description="Close the current diet order and open a new one effective on the given date.",
    responses={
        201: {"description": "New diet assignment"},
        404: {"description": "Record not found or access denied"},
        422: {"description": "Invalid diet type or effective date"},
    },
)
async def change_diet(
    diner_id: str, request: DietChangeBody, service: DinerServiceDep
) -> DietAssignmentRead:
    change = DietChange(diner_id=diner_id, **request.model_dump())
    assignment = await service.change_diet(change)
    return DietAssignmentRead.model_validate(assignment)


@router.get(
    "/{diner_id}/diet-history",
    response_model=list[DietAssignmentRead],
    summary="Diet history",
    description="Every diet assignment for the diner, most recent effective date first.",
    responses={404: {"description": "Record not found or access denied"}},
)
async def get_diet_history(diner_id: str, service: DinerServiceDep) -> list[DietAssignmentRead]:
    history = await service.get_diet_history(diner_id)
    return [DietAssignmentRead.model_validate(a) for a in history]


@router.post(
    "/{diner_id}/discharge",
    response_model=DinerRead,
    summary="Discharge diner",
    description="Close every open diet assignment and mark the diner Discharged.",
    responses={
        404: {"description": "Record not found or access denied"},
        422: {"description": "Discharge date precedes the current diet order"},
    },
)
async def discharge_diner(
    diner_id: str,
    service: DinerServiceDep,
    request: Annotated[DischargeRequest | None, Body()] = None,
) -> DinerRead:
    as_of = request.as_of if request else None
    diner = await service.discharge(diner_id, as_of)
    return DinerRead.model_validate(diner)
