"""Tenant context extraction from gateway headers.

Authentication happens upstream. The gateway forwards ``X-Tenant-ID``,
``X-User-Role`` and ``X-User-Email``; this module only checks that the
tenant exists and may use the API.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.foodservice.api.dependencies.db import DBSession
from src.foodservice.core.logging import bind_tenant_context, get_logger
from src.foodservice.crud import TenantContext
from src.foodservice.models.enums import UserRole
from src.foodservice.repositories import TenantRepository

logger = get_logger(__name__)


def _parse_role(raw: str | None) -> UserRole:
    if not raw:
        return UserRole.VIEWER
    try:
        return UserRole(raw.strip().lower())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown role '{raw}'",
        ) from None


async def get_tenant_context(
    session: DBSession,
    x_tenant_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
    x_user_email: Annotated[str | None, Header()] = None,
) -> TenantContext | None:
    """Resolve the caller's tenant context, or None for anonymous calls.

    Raises:
        HTTPException: 401 for an unknown tenant or role, 403 for a tenant
            that is suspended or cancelled.
    """
    if not x_tenant_id:
        return None

    tenant = await TenantRepository(session).get_by_id(x_tenant_id)
    if tenant is None:
        logger.info("Unknown tenant in request headers", tenant_id=x_tenant_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown tenant",
        )
    if not tenant.is_usable:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Tenant is {tenant.status.value}",
        )

    role = _parse_role(x_user_role)
    bind_tenant_context(tenant.tenant_id, role.value, x_user_email)
    return TenantContext(
        tenant_id=tenant.tenant_id,
        role=role,
        status=tenant.status,
        user_email=x_user_email,
    )


async def require_tenant_context(
    tenant: Annotated[TenantContext | None, Depends(get_tenant_context)],
) -> TenantContext:
    """Same as get_tenant_context, but anonymous callers get 401."""
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Tenant-ID header is required",
        )
    return tenant


OptionalTenant = Annotated[TenantContext | None, Depends(get_tenant_context)]
CurrentTenant = Annotated[TenantContext, Depends(require_tenant_context)]
