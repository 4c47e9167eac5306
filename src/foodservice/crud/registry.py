"""Registry of entity descriptors assembled at process start."""

from collections.abc import Iterable, Iterator

from src.foodservice.core.logging import get_logger
from src.foodservice.crud.descriptor import EntityDescriptor
from src.foodservice.crud.operations import CrudEntity

logger = get_logger(__name__)


class EntityRegistry:
    """Explicit registry value; build one per app (or per test).

    Contracts are synthesized once when a descriptor is registered.
    """

    def __init__(self, descriptors: Iterable[EntityDescriptor] = ()):
        self._entities: dict[str, CrudEntity] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: EntityDescriptor) -> CrudEntity:
        if descriptor.name in self._entities:
            raise ValueError(f"Entity '{descriptor.name}' is already registered")
        entity = CrudEntity.from_descriptor(descriptor)
        self._entities[descriptor.name] = entity
        logger.debug(
            "Entity registered",
            entity=descriptor.name,
            tenant_mode=descriptor.tenant_mode.value,
            visibility=descriptor.visibility.value,
            required=list(entity.schemas.required_fields),
        )
        return entity

    def get(self, name: str) -> CrudEntity:
        try:
            return self._entities[name]
        except KeyError:
            raise KeyError(f"Unknown entity '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[CrudEntity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

    @property
    def names(self) -> list[str]:
        return list(self._entities)
