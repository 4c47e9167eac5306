"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.foodservice.crud import TenantContext
from src.foodservice.models import DietType, Site, Tenant
from src.foodservice.models.enums import UserRole
from tests.factories import DietTypeFactory, SiteFactory, TenantFactory


def context_for(
    tenant: Tenant, role: UserRole = UserRole.MANAGER, email: str | None = None
) -> TenantContext:
    """Caller context acting for ``tenant``."""
    return TenantContext(
        tenant_id=tenant.tenant_id,
        role=role,
        status=tenant.status,
        user_email=email or f"{role.value}@{tenant.tenant_code.lower()}.example.com",
    )


def headers_for(tenant: Tenant, role: UserRole = UserRole.MANAGER) -> dict[str, str]:
    """Gateway headers for an HTTP call acting for ``tenant``."""
    return {
        "X-Tenant-ID": tenant.tenant_id,
        "X-User-Role": role.value,
        "X-User-Email": f"{role.value}@example.com",
    }


async def create_tenant_with_site(
    session: AsyncSession, **tenant_kwargs
) -> tuple[Tenant, Site]:
    """Create and commit a tenant with one site.

    Args:
        session: Database session
        **tenant_kwargs: Additional args passed to TenantFactory

    Returns:
        Tuple of (tenant, site)
    """
    tenant = TenantFactory.build(**tenant_kwargs)
    session.add(tenant)
    await session.flush()

    site = SiteFactory.build(tenant_id=tenant.tenant_id)
    session.add(site)
    await session.commit()
    return tenant, site


async def create_diet_type(
    session: AsyncSession, tenant: Tenant | None = None, **kwargs
) -> DietType:
    """Create and commit a diet type; system-wide when ``tenant`` is None."""
    diet = DietTypeFactory.build(tenant_id=tenant.tenant_id if tenant else None, **kwargs)
    session.add(diet)
    await session.commit()
    return diet
