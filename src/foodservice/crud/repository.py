"""Repository driven by an entity descriptor instead of a subclass."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.foodservice.crud.descriptor import EntityDescriptor
from src.foodservice.repositories.base import BaseRepository


class EntityRepository(BaseRepository[Any]):
    """Data access for any registered entity.

    The model and identity column come from the descriptor, so one class
    serves every generic entity.
    """

    def __init__(self, descriptor: EntityDescriptor, session: AsyncSession):
        super().__init__(session)
        self.descriptor = descriptor
        self.model = descriptor.model
        self.identity_field = descriptor.identity_field

    @property
    def default_order(self) -> tuple[Any, ...]:
        if self.descriptor.order_by is None:
            return ()
        return (getattr(self.model, self.descriptor.order_by),)
