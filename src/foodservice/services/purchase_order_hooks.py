"""Purchase order lifecycle hooks.

Line items carry no tenant column; they are scoped through their order,
which must belong to the caller and still be a Draft. Order ``subtotal`` and
``total`` are derived from line items and recomputed after every change.
"""

from typing import Any

from sqlalchemy import func
from sqlmodel import select

from src.foodservice.core.logging import get_logger
from src.foodservice.crud.errors import (
    ConflictError,
    NotFoundOrForbiddenError,
    TenantContextRequiredError,
    ValidationError,
)
from src.foodservice.crud.hooks import HookContext
from src.foodservice.models.enums import PurchaseOrderStatus
from src.foodservice.models.organization import Site
from src.foodservice.models.procurement import PoLineItem, PurchaseOrder, Vendor

logger = get_logger(__name__)


def _money(value: float) -> float:
    return round(value, 2)


async def get_owned_order(ctx: HookContext, po_number: str) -> PurchaseOrder:
    """Load an order the caller's tenant owns, or fail without saying why."""
    if ctx.tenant is None:
        raise TenantContextRequiredError()
    result = await ctx.session.execute(
        select(PurchaseOrder).where(
            PurchaseOrder.po_number == po_number,
            PurchaseOrder.tenant_id == ctx.tenant.tenant_id,
        )
    )
    order = result.scalar_one_or_none()
    if order is None:
        raise NotFoundOrForbiddenError("purchase-orders", po_number)
    return order


async def get_draft_order(ctx: HookContext, po_number: str) -> PurchaseOrder:
    order = await get_owned_order(ctx, po_number)
    if order.status != PurchaseOrderStatus.DRAFT:
        raise ConflictError(
            f"Purchase order {po_number} is {order.status.value}; only Draft orders can change"
        )
    return order


async def recalculate_order_totals(ctx: HookContext, po_number: str) -> PurchaseOrder | None:
    """Set ``subtotal`` from line items and ``total = subtotal + tax + shipping``.

    Changes are left pending; the engine commits them after the hook.
    """
    order = await ctx.session.get(PurchaseOrder, po_number)
    if order is None:
        return None
    result = await ctx.session.execute(
        select(func.coalesce(func.sum(PoLineItem.extended_price), 0.0)).where(
            PoLineItem.po_number == po_number
        )
    )
    subtotal = _money(float(result.scalar_one()))
    order.subtotal = subtotal
    order.total = _money(subtotal + (order.tax or 0.0) + (order.shipping or 0.0))
    ctx.session.add(order)
    logger.debug("Order totals recalculated", po_number=po_number, subtotal=subtotal, total=order.total)
    return order


# Purchase orders


async def _check_order_references(data: dict[str, Any], ctx: HookContext) -> None:
    """Whichever of vendor and site is given must belong to the caller's tenant."""
    if ctx.tenant is None:
        raise TenantContextRequiredError()
    tenant_id = ctx.tenant.tenant_id

    if "vendor_id" in data:
        vendor = await ctx.session.execute(
            select(Vendor.vendor_id).where(
                Vendor.vendor_id == data["vendor_id"], Vendor.tenant_id == tenant_id
            )
        )
        if vendor.scalar_one_or_none() is None:
            raise ValidationError.single("vendor_id", "Vendor not found")

    if "site_id" in data:
        site = await ctx.session.execute(
            select(Site.site_id).where(Site.site_id == data["site_id"], Site.tenant_id == tenant_id)
        )
        if site.scalar_one_or_none() is None:
            raise ValidationError.single("site_id", "Site not found")


async def before_order_create(data: dict[str, Any], ctx: HookContext) -> dict[str, Any]:
    await _check_order_references(data, ctx)
    return data


async def before_order_update(
    po_number: str, data: dict[str, Any], ctx: HookContext
) -> dict[str, Any]:
    await _check_order_references(data, ctx)
    return data


async def after_order_update(order: PurchaseOrder, ctx: HookContext) -> None:
    """Tax or shipping may have changed; keep ``total`` consistent."""
    await recalculate_order_totals(ctx, order.po_number)


# Line items


async def before_line_item_create(data: dict[str, Any], ctx: HookContext) -> dict[str, Any]:
    await get_draft_order(ctx, data["po_number"])
    data["extended_price"] = _money(data["quantity_ordered"] * data["unit_price"])
    return data


async def before_line_item_update(
    line_item_id: str, data: dict[str, Any], ctx: HookContext
) -> dict[str, Any]:
    item = await ctx.session.get(PoLineItem, line_item_id)
    if item is None:
        raise NotFoundOrForbiddenError("po-line-items", line_item_id)
    if "po_number" in data and data["po_number"] != item.po_number:
        raise ValidationError.single("po_number", "Line items cannot move between purchase orders")
    await get_draft_order(ctx, item.po_number)

    quantity = data.get("quantity_ordered", item.quantity_ordered)
    price = data.get("unit_price", item.unit_price)
    data["extended_price"] = _money(quantity * price)
    return data


async def before_line_item_delete(line_item_id: str, ctx: HookContext) -> None:
    item = await ctx.session.get(PoLineItem, line_item_id)
    if item is None:
        raise NotFoundOrForbiddenError("po-line-items", line_item_id)
    await get_draft_order(ctx, item.po_number)


async def after_line_item_change(item: PoLineItem, ctx: HookContext) -> None:
    await recalculate_order_totals(ctx, item.po_number)
