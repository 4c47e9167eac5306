"""Repositories for diners and their diet assignment history."""

from datetime import date

from sqlalchemy import delete, func, or_, update
from sqlmodel import col, select

from src.foodservice.models.diners import DietAssignment, Diner
from src.foodservice.models.enums import DinerStatus, DinerType
from src.foodservice.models.menu import DietType
from src.foodservice.repositories.base import BaseRepository


class DinerRepository(BaseRepository[Diner]):
    """Repository for Diner entity. Every query is tenant-scoped."""

    model = Diner
    identity_field = "diner_id"

    async def get_for_tenant(
        self, tenant_id: str, diner_id: str, *, for_update: bool = False
    ) -> Diner | None:
        """Get a diner only if it belongs to ``tenant_id``.

        ``for_update`` locks the row so concurrent diet changes on the same
        diner serialize (no-op on SQLite).
        """
        return await self.get_by_id(diner_id, [Diner.tenant_id == tenant_id], for_update=for_update)

    async def list_filtered(
        self,
        tenant_id: str,
        *,
        site_id: str | None = None,
        status: DinerStatus | None = None,
        diner_type: DinerType | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Diner]:
        conditions = [Diner.tenant_id == tenant_id]
        if site_id:
            conditions.append(Diner.site_id == site_id)
        if status:
            conditions.append(Diner.status == status)
        if diner_type:
            conditions.append(Diner.diner_type == diner_type)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(Diner.first_name).like(pattern),
                    func.lower(Diner.last_name).like(pattern),
                    func.lower(Diner.room_number).like(pattern),
                )
            )
        return await self.list_page(
            conditions,
            limit=limit,
            offset=offset,
            order_by=(col(Diner.last_name), col(Diner.first_name)),
        )

    async def count_by_status(self, tenant_id: str) -> dict[str, int]:
        """Map status value to diner count for ``tenant_id``."""
        result = await self.session.execute(
            select(Diner.status, func.count())
            .where(Diner.tenant_id == tenant_id)
            .group_by(Diner.status)
        )
        return {
            (status.value if isinstance(status, DinerStatus) else str(status)): count
            for status, count in result.all()
        }

    async def get_visible_diet_type(self, tenant_id: str, diet_type_id: str) -> DietType | None:
        """Get a diet type that is system-wide or owned by ``tenant_id``."""
        result = await self.session.execute(
            select(DietType).where(
                DietType.diet_type_id == diet_type_id,
                or_(col(DietType.tenant_id).is_(None), DietType.tenant_id == tenant_id),
            )
        )
        return result.scalar_one_or_none()


class DietAssignmentRepository(BaseRepository[DietAssignment]):
    """Append-only access to diet assignment intervals."""

    model = DietAssignment
    identity_field = "assignment_id"

    async def get_open(self, diner_id: str) -> DietAssignment | None:
        """The diner's current assignment, if any."""
        result = await self.session.execute(
            select(DietAssignment).where(
                DietAssignment.diner_id == diner_id,
                col(DietAssignment.end_date).is_(None),
            )
        )
        return result.scalar_one_or_none()

    async def count_open(self, diner_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(DietAssignment)
            .where(
                DietAssignment.diner_id == diner_id,
                col(DietAssignment.end_date).is_(None),
            )
        )
        return int(result.scalar_one())

    async def latest_end_date(self, diner_id: str) -> date | None:
        """Latest ``end_date`` among the diner's closed assignments."""
        result = await self.session.execute(
            select(func.max(DietAssignment.end_date)).where(DietAssignment.diner_id == diner_id)
        )
        return result.scalar_one_or_none()

    async def list_for_diner(self, diner_id: str) -> list[DietAssignment]:
        """Full history, most recent effective date first."""
        result = await self.session.execute(
            select(DietAssignment)
            .where(DietAssignment.diner_id == diner_id)
            .order_by(
                col(DietAssignment.effective_date).desc(),
                col(DietAssignment.created_date).desc(),
            )
        )
        return list(result.scalars().all())

    async def close_open(self, diner_id: str, end_date: date) -> int:
        """Set ``end_date`` on every open assignment of the diner.

        Returns:
            Number of rows closed.
        """
        result = await self.session.execute(
            update(DietAssignment)
            .where(
                col(DietAssignment.diner_id) == diner_id,
                col(DietAssignment.end_date).is_(None),
            )
            .values(end_date=end_date)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def delete_for_diner(self, diner_id: str) -> int:
        result = await self.session.execute(
            delete(DietAssignment).where(col(DietAssignment.diner_id) == diner_id)
        )
        return result.rowcount or 0
