from src.foodservice.services.diner_service import DinerService
from src.foodservice.services.purchase_order_service import PurchaseOrderService

__all__ = ["DinerService", "PurchaseOrderService"]
