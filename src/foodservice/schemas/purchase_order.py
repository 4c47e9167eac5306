"""Purchase order workflow schemas for API request/response."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from src.foodservice.models.enums import PurchaseOrderStatus


class CancelRequest(BaseModel):
    """Optional reason, appended to the order's notes."""

    model_config = ConfigDict(extra="forbid")

    reason: str | None = Field(default=None, max_length=1000)


class PurchaseOrderRead(BaseModel):
    """Schema for reading a purchase order header."""

    model_config = ConfigDict(from_attributes=True)

    po_number: str
    tenant_id: str
    vendor_id: str
    site_id: str
    order_date: date
    requested_delivery_date: date
    actual_delivery_date: date | None
    ordered_by: str
    subtotal: float | None
    tax: float | None
    shipping: float | None
    total: float | None
    payment_terms: str | None
    status: PurchaseOrderStatus
    delivery_instructions: str | None
    notes: str | None
