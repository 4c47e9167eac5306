"""Schema-driven, tenant-isolated CRUD engine.

Import from here: `from src.foodservice.crud import EntityDescriptor, EntityRegistry`
"""

from src.foodservice.crud.bulk import bulk_create, bulk_delete
from src.foodservice.crud.descriptor import (
    EntityDescriptor,
    Hooks,
    ParentScope,
    TenantMode,
    Visibility,
)
from src.foodservice.crud.errors import (
    ConflictError,
    CrudError,
    HookError,
    NotFoundOrForbiddenError,
    PermissionDeniedError,
    TenantContextRequiredError,
    ValidationError,
)
from src.foodservice.crud.hooks import HookContext
from src.foodservice.crud.operations import CrudEntity, DeleteResult, EntityService
from src.foodservice.crud.registry import EntityRegistry
from src.foodservice.crud.tenancy import TenantContext

__all__ = [
    # Descriptor
    "EntityDescriptor",
    "Hooks",
    "ParentScope",
    "TenantMode",
    "Visibility",
    # Errors
    "ConflictError",
    "CrudError",
    "HookError",
    "NotFoundOrForbiddenError",
    "PermissionDeniedError",
    "TenantContextRequiredError",
    "ValidationError",
    # Operations
    "CrudEntity",
    "DeleteResult",
    "EntityRegistry",
    "EntityService",
    "HookContext",
    "TenantContext",
    "bulk_create",
    "bulk_delete",
]
