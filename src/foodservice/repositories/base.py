"""Base repository with common data access operations."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit,
    rollback) is done in the service layer.
    """

    model: type[ModelType]
    identity_field: str

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def identity_column(self) -> Any:
        return getattr(self.model, self.identity_field)

    async def get_by_id(
        self,
        record_id: str,
        conditions: Sequence[Any] = (),
        *,
        for_update: bool = False,
    ) -> ModelType | None:
        """Get a record by identity, optionally narrowed by extra conditions."""
        query = select(self.model).where(self.identity_column == record_id, *conditions)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_page(
        self,
        conditions: Sequence[Any] = (),
        *,
        limit: int,
        offset: int = 0,
        order_by: Sequence[Any] = (),
    ) -> list[ModelType]:
        """List records matching ``conditions`` with offset pagination."""
        query = select(self.model).where(*conditions)
        if order_by:
            query = query.order_by(*order_by)
        query = query.offset(offset).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)
