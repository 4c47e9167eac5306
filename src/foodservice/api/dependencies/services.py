"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.foodservice.api.dependencies.db import DBSession
from src.foodservice.api.dependencies.tenant import CurrentTenant
from src.foodservice.repositories import (
    DietAssignmentRepository,
    DinerRepository,
    PurchaseOrderRepository,
    TenantRepository,
)
from src.foodservice.services import DinerService, PurchaseOrderService


def get_diner_service(session: DBSession, tenant: CurrentTenant) -> DinerService:
    """Get diner service bound to the caller's tenant."""
    return DinerService(
        DinerRepository(session),
        DietAssignmentRepository(session),
        TenantRepository(session),
        session,
        tenant,
    )


DinerServiceDep = Annotated[DinerService, Depends(get_diner_service)]


def get_purchase_order_service(session: DBSession, tenant: CurrentTenant) -> PurchaseOrderService:
    """Get purchase order workflow service bound to the caller's tenant."""
    return PurchaseOrderService(PurchaseOrderRepository(session), session, tenant)


PurchaseOrderServiceDep = Annotated[PurchaseOrderService, Depends(get_purchase_order_service)]
