"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

# Database
from src.foodservice.api.dependencies.db import DBSession, get_db_session

# Registry
from src.foodservice.api.dependencies.registry import Registry, get_registry

# Services
from src.foodservice.api.dependencies.services import (
    DinerServiceDep,
    PurchaseOrderServiceDep,
    get_diner_service,
    get_purchase_order_service,
)

# Tenant
from src.foodservice.api.dependencies.tenant import (
    CurrentTenant,
    OptionalTenant,
    get_tenant_context,
    require_tenant_context,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Registry
    "Registry",
    "get_registry",
    # Tenant
    "CurrentTenant",
    "OptionalTenant",
    "get_tenant_context",
    "require_tenant_context",
    # Services
    "DinerServiceDep",
    "get_diner_service",
    "PurchaseOrderServiceDep",
    "get_purchase_order_service",
]
