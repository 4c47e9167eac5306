"""Purchase order workflow endpoints.

Header and line item CRUD go through the generic entity routes; status
transitions are here.
"""

from typing import Annotated

from fastapi import APIRouter, Body

from src.foodservice.api.dependencies import PurchaseOrderServiceDep
from src.foodservice.schemas.purchase_order import CancelRequest, PurchaseOrderRead

router = APIRouter(prefix="/purchase-orders", tags=["purchase-orders"])

TRANSITION_RESPONSES = {
    404: {"description": "Record not found or access denied"},
    409: {"description": "Order is not in a state that allows this transition"},
}


@router.post(
    "/{po_number}/submit",
    response_model=PurchaseOrderRead,
    summary="Submit purchase order",
    description="Send a Draft order with at least one line item to the vendor.",
    responses=TRANSITION_RESPONSES,
)
async def submit_purchase_order(
    po_number: str, service: PurchaseOrderServiceDep
) -> PurchaseOrderRead:
    order = await service.submit(po_number)
    return PurchaseOrderRead.model_validate(order)


@router.post(
    "/{po_number}/confirm",
    response_model=PurchaseOrderRead,
    summary="Confirm purchase order",
    description="Record the vendor's confirmation of a Submitted order.",
    responses=TRANSITION_RESPONSES,
)
async def confirm_purchase_order(
    po_number: str, service: PurchaseOrderServiceDep
) -> PurchaseOrderRead:
    order = await service.confirm(po_number)
    return PurchaseOrderRead.model_validate(order)


@router.post(
    "/{po_number}/cancel",
    response_model=PurchaseOrderRead,
    summary="Cancel purchase order",
    description="Cancel any order that has not been received.",
    responses=TRANSITION_RESPONSES,
)
async def cancel_purchase_order(
    po_number: str,
    service: PurchaseOrderServiceDep,
    request: Annotated[CancelRequest | None, Body()] = None,
) -> PurchaseOrderRead:
    order = await service.cancel(po_number, request.reason if request else None)
    return PurchaseOrderRead.model_validate(order)
