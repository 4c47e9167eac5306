"""Tenant isolation: row predicates, tenant stamping, and access checks.

Read predicates per mode:

- required: ``tenant_field = caller``
- optional: ``tenant_field IS NULL OR tenant_field = caller``
- none: no predicate; access is governed by visibility alone, unless the
  descriptor names a ParentScope, in which case rows are tied to parents the
  caller owns

Write predicates (update/delete) drop the ``IS NULL`` branch so shared
system-wide rows cannot be changed through the generic operations.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import or_, select

from src.foodservice.crud.descriptor import EntityDescriptor, ParentScope, TenantMode
from src.foodservice.crud.errors import PermissionDeniedError, TenantContextRequiredError
from src.foodservice.models.enums import TenantStatus, UserRole

# Roles allowed to mutate public reference data (tenant mode none).
REFERENCE_WRITE_ROLES = frozenset({UserRole.ADMIN})


@dataclass(frozen=True, slots=True)
class TenantContext:
    """Already-authenticated caller identity for one request."""

    tenant_id: str
    role: UserRole = UserRole.VIEWER
    status: TenantStatus = TenantStatus.ACTIVE
    user_email: str | None = None

    @property
    def actor(self) -> str:
        return self.user_email or f"{self.role.value}@{self.tenant_id}"


def _column(descriptor: EntityDescriptor, name: str) -> Any:
    return getattr(descriptor.model, name)


def owned_parent_keys(scope: ParentScope, tenant: TenantContext | None) -> Any:
    """SELECT of the parent keys that belong to ``tenant``."""
    if tenant is None:
        raise TenantContextRequiredError()
    return select(getattr(scope.parent, scope.parent_key)).where(
        getattr(scope.parent, scope.parent_tenant_field) == tenant.tenant_id
    )


def parent_conditions(descriptor: EntityDescriptor, tenant: TenantContext | None) -> list[Any]:
    """Conditions tying a row to a parent the caller owns."""
    scope = descriptor.parent_scope
    if scope is None:
        return []
    return [_column(descriptor, scope.column).in_(owned_parent_keys(scope, tenant))]


def read_conditions(descriptor: EntityDescriptor, tenant: TenantContext | None) -> list[Any]:
    """Row conditions restricting reads to what ``tenant`` may see."""
    if descriptor.tenant_mode is TenantMode.NONE:
        return parent_conditions(descriptor, tenant)
    column = _column(descriptor, descriptor.tenant_field)  # type: ignore[arg-type]
    if descriptor.tenant_mode is TenantMode.REQUIRED:
        if tenant is None:
            raise TenantContextRequiredError()
        return [column == tenant.tenant_id]
    # Optional: anonymous callers only ever see shared rows.
    if tenant is None:
        return [column.is_(None)]
    return [or_(column.is_(None), column == tenant.tenant_id)]


def write_conditions(descriptor: EntityDescriptor, tenant: TenantContext | None) -> list[Any]:
    """Row conditions restricting update/delete to rows ``tenant`` owns."""
    if descriptor.tenant_mode is TenantMode.NONE:
        return parent_conditions(descriptor, tenant)
    if tenant is None:
        raise TenantContextRequiredError()
    column = _column(descriptor, descriptor.tenant_field)  # type: ignore[arg-type]
    return [column == tenant.tenant_id]


def stamp(descriptor: EntityDescriptor, tenant: TenantContext | None) -> dict[str, str]:
    """Tenant column values to set on a new record.

    Returns an empty mapping for tenant mode none.
    """
    if descriptor.tenant_mode is TenantMode.NONE:
        return {}
    if tenant is None:
        raise TenantContextRequiredError()
    return {descriptor.tenant_field: tenant.tenant_id}  # type: ignore[dict-item]


def ensure_can_read(descriptor: EntityDescriptor, tenant: TenantContext | None) -> None:
    """Anonymous reads are only allowed on public, non-required entities."""
    if tenant is not None:
        return
    if descriptor.tenant_mode is TenantMode.REQUIRED or not descriptor.is_public:
        raise TenantContextRequiredError()


def ensure_can_write(descriptor: EntityDescriptor, tenant: TenantContext | None) -> None:
    """Every mutation needs a caller; shared public reference data needs an admin."""
    if tenant is None:
        raise TenantContextRequiredError()
    if tenant.role is UserRole.VIEWER:
        raise PermissionDeniedError()
    if (
        descriptor.is_public
        and descriptor.tenant_mode is TenantMode.NONE
        and tenant.role not in REFERENCE_WRITE_ROLES
    ):
        raise PermissionDeniedError()
