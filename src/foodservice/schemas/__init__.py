from src.foodservice.schemas.bulk import (
    BulkCreateOptions,
    BulkCreateRequest,
    BulkDeleteOptions,
    BulkDeleteRequest,
    BulkItemResult,
    BulkOperationResult,
)
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
from src.foodservice.schemas.purchase_order import CancelRequest, PurchaseOrderRead

__all__ = [
    # Bulk
    "BulkCreateOptions",
    "BulkCreateRequest",
    "BulkDeleteOptions",
    "BulkDeleteRequest",
    "BulkItemResult",
    "BulkOperationResult",
    # Diner
    "DietAssignmentRead",
    "DietChange",
    "DietChangeBody",
    "DinerCounts",
    "DinerCreate",
    "DinerListFilter",
    "DinerRead",
    "DischargeRequest",
    # Purchase orders
    "CancelRequest",
    "PurchaseOrderRead",
]
