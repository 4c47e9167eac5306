"""Purchase order workflow - the only way an order's status changes.

- ``submit``: Draft to Submitted, once the order has at least one line
- ``confirm``: Submitted to Confirmed, when the vendor acknowledges it
- ``cancel``: any status except Received; the reason is appended to notes

Header fields and line items go through the generic CRUD engine, which
refuses line changes once an order has left Draft.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.foodservice.core.logging import get_logger
from src.foodservice.crud.errors import (
    ConflictError,
    NotFoundOrForbiddenError,
    PermissionDeniedError,
)
from src.foodservice.crud.tenancy import TenantContext
from src.foodservice.models.enums import PurchaseOrderStatus, UserRole
from src.foodservice.models.procurement import PurchaseOrder
from src.foodservice.repositories import PurchaseOrderRepository

logger = get_logger(__name__)


class PurchaseOrderService:
    """Purchase order status transitions."""

    def __init__(
        self,
        order_repo: PurchaseOrderRepository,
        session: AsyncSession,
        tenant: TenantContext,
    ):
        self.order_repo = order_repo
        self.session = session
        self.tenant = tenant

    async def _get_order(self, po_number: str) -> PurchaseOrder:
        if self.tenant.role is UserRole.VIEWER:
            raise PermissionDeniedError()
        order = await self.order_repo.get_for_tenant(
            self.tenant.tenant_id, po_number, for_update=True
        )
        if order is None:
            logger.info("Purchase order not found or access denied", po_number=po_number)
            raise NotFoundOrForbiddenError("purchase-orders", po_number)
        return order

    async def _set_status(self, order: PurchaseOrder, status: PurchaseOrderStatus) -> PurchaseOrder:
        previous = order.status
        order.status = status
        self.order_repo.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        logger.info(
            "Purchase order status changed",
            po_number=order.po_number,
            previous=previous.value,
            status=status.value,
        )
        return order

    async def submit(self, po_number: str) -> PurchaseOrder:
        """Send a Draft order to the vendor.

        Raises:
            NotFoundOrForbiddenError: If the order is not the tenant's.
            ConflictError: If the order is not a Draft or has no line items.
            PermissionDeniedError: If the caller is read-only.
        """
        order = await self._get_order(po_number)
        if order.status != PurchaseOrderStatus.DRAFT:
            raise ConflictError(
                f"Only Draft orders can be submitted; {po_number} is {order.status.value}"
            )
        if await self.order_repo.count_line_items(po_number) == 0:
            raise ConflictError(f"Purchase order {po_number} has no line items")
        return await self._set_status(order, PurchaseOrderStatus.SUBMITTED)

    async def confirm(self, po_number: str) -> PurchaseOrder:
        """Record the vendor's confirmation of a Submitted order."""
        order = await self._get_order(po_number)
        if order.status != PurchaseOrderStatus.SUBMITTED:
            raise ConflictError(
                f"Only Submitted orders can be confirmed; {po_number} is {order.status.value}"
            )
        return await self._set_status(order, PurchaseOrderStatus.CONFIRMED)

    async def cancel(self, po_number: str, reason: str | None = None) -> PurchaseOrder:
        """Cancel an order that has not been received.

        Raises:
            ConflictError: If the order is already Received.
        """
        order = await self._get_order(po_number)
        if order.status == PurchaseOrderStatus.RECEIVED:
            raise ConflictError(f"Purchase order {po_number} was received and cannot be cancelled")
        if reason:
            order.notes = f"{order.notes or ''}\n\nCancelled: {reason}".strip()
        return await self._set_status(order, PurchaseOrderStatus.CANCELLED)
