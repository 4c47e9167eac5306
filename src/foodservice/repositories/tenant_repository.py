"""Repository for Tenant entity."""

from sqlmodel import select

from src.foodservice.models.organization import Site, Tenant
from src.foodservice.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant entity."""

    model = Tenant
    identity_field = "tenant_id"

    async def get_site(self, tenant_id: str, site_id: str) -> Site | None:
        """Get a site only if it belongs to ``tenant_id``."""
        result = await self.session.execute(
            select(Site).where(Site.site_id == site_id, Site.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()
