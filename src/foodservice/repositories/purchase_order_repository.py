"""Repository for purchase order headers."""

from sqlalchemy import func
from sqlmodel import select

from src.foodservice.models.procurement import PoLineItem, PurchaseOrder
from src.foodservice.repositories.base import BaseRepository


class PurchaseOrderRepository(BaseRepository[PurchaseOrder]):
    """Repository for PurchaseOrder entity. Every query is tenant-scoped."""

    model = PurchaseOrder
    identity_field = "po_number"

    async def get_for_tenant(
        self, tenant_id: str, po_number: str, *, for_update: bool = False
    ) -> PurchaseOrder | None:
        """Get an order only if it belongs to ``tenant_id``."""
        return await self.get_by_id(
            po_number, [PurchaseOrder.tenant_id == tenant_id], for_update=for_update
        )

    async def count_line_items(self, po_number: str) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(PoLineItem).where(PoLineItem.po_number == po_number)
        )
        return int(result.scalar_one())
