"""Procurement models - vendors and purchase orders."""

from datetime import date

from sqlmodel import Field, SQLModel

from src.foodservice.models.base import enum_column
from src.foodservice.models.enums import PurchaseOrderStatus, VendorStatus, VendorType


class Vendor(SQLModel, table=True):
    __tablename__ = "vendors"

    vendor_id: str = Field(primary_key=True, max_length=32)
    tenant_id: str = Field(foreign_key="tenants.tenant_id", index=True, max_length=32)
    vendor_name: str = Field(max_length=200)
    vendor_type: VendorType = Field(sa_column=enum_column(VendorType, nullable=False))
    contact_name: str | None = Field(default=None, max_length=200)
    phone: str = Field(max_length=50)
    email: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=500)
    delivery_days: str | None = Field(default=None, max_length=100)
    delivery_lead_time_days: int | None = Field(default=None)
    minimum_order: float | None = Field(default=None)
    payment_terms: str | None = Field(default=None, max_length=100)
    account_number: str | None = Field(default=None, max_length=100)
    insurance_on_file: bool | None = Field(default=False)
    status: VendorStatus = Field(
        default=VendorStatus.ACTIVE,
        sa_column=enum_column(VendorStatus, nullable=False, default=VendorStatus.ACTIVE),
    )
    notes: str | None = Field(default=None)


class PurchaseOrder(SQLModel, table=True):
    """Purchase order header. ``subtotal``/``total`` are rolled up from line items."""

    __tablename__ = "purchase_orders"

    po_number: str = Field(primary_key=True, max_length=32)
    tenant_id: str = Field(foreign_key="tenants.tenant_id", index=True, max_length=32)
    vendor_id: str = Field(foreign_key="vendors.vendor_id", index=True, max_length=32)
    site_id: str = Field(foreign_key="sites.site_id", max_length=32)
    order_date: date
    requested_delivery_date: date
    actual_delivery_date: date | None = Field(default=None)
    ordered_by: str = Field(max_length=255)
    subtotal: float | None = Field(default=None)
    tax: float | None = Field(default=None)
    shipping: float | None = Field(default=None)
    total: float | None = Field(default=None)
    payment_terms: str | None = Field(default=None, max_length=100)
    status: PurchaseOrderStatus = Field(
        default=PurchaseOrderStatus.DRAFT,
        sa_column=enum_column(
            PurchaseOrderStatus, nullable=False, default=PurchaseOrderStatus.DRAFT, index=True
        ),
    )
    delivery_instructions: str | None = Field(default=None)
    notes: str | None = Field(default=None)


class PoLineItem(SQLModel, table=True):
    """Purchase order line. Carries no tenant column; scoped through its order."""

    __tablename__ = "po_line_items"

    line_item_id: str = Field(primary_key=True, max_length=32)
    po_number: str = Field(
        foreign_key="purchase_orders.po_number", ondelete="CASCADE", index=True, max_length=32
    )
    ingredient_id: str = Field(foreign_key="ingredients.ingredient_id", max_length=32)
    quantity_ordered: float
    unit_of_measure: str = Field(foreign_key="units_of_measure.unit_id", max_length=32)
    unit_price: float
    extended_price: float
    quantity_received: float | None = Field(default=None)
    variance: float | None = Field(default=None)
    notes: str | None = Field(default=None)
