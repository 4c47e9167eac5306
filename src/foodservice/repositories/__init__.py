"""Repository layer - data access abstraction.

The descriptor-driven repository used by the CRUD engine lives in
``src.foodservice.crud.repository``.
"""

from src.foodservice.repositories.base import BaseRepository
from src.foodservice.repositories.diner_repository import DietAssignmentRepository, DinerRepository
from src.foodservice.repositories.purchase_order_repository import PurchaseOrderRepository
from src.foodservice.repositories.tenant_repository import TenantRepository

__all__ = [
    "BaseRepository",
    "DietAssignmentRepository",
    "DinerRepository",
    "PurchaseOrderRepository",
    "TenantRepository",
]
