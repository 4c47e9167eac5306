"""The six canonical operations for one registered entity."""

from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.foodservice.core.config import get_settings
from src.foodservice.core.ids import generate_id
from src.foodservice.core.logging import get_logger
from src.foodservice.crud import tenancy
from src.foodservice.crud.descriptor import EntityDescriptor
from src.foodservice.crud.errors import (
    NOT_FOUND_OR_FORBIDDEN_MESSAGE,
    ConflictError,
    NotFoundOrForbiddenError,
    ValidationError,
)
from src.foodservice.crud.hooks import HookContext, run_after_hook, run_before_hook
from src.foodservice.crud.repository import EntityRepository
from src.foodservice.crud.schema import EntitySchemas, build_schemas, validate_payload
from src.foodservice.crud.tenancy import TenantContext

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CrudEntity:
    """A descriptor plus the contracts synthesized for it at registration."""

    descriptor: EntityDescriptor
    schemas: EntitySchemas

    @classmethod
    def from_descriptor(cls, descriptor: EntityDescriptor) -> "CrudEntity":
        return cls(descriptor=descriptor, schemas=build_schemas(descriptor))

    @property
    def name(self) -> str:
        return self.descriptor.name

    def service(self, session: AsyncSession, tenant: TenantContext | None) -> "EntityService":
        return EntityService(self, session, tenant)


@dataclass(frozen=True, slots=True)
class DeleteResult:
    id: str
    success: bool = True


class EntityService:
    """Operations for one entity, bound to one session and one caller.

    Built per request. Reads go through the tenant read predicate, writes
    through the stricter write predicate; a miss on either is reported as
    NotFoundOrForbiddenError without saying which.
    """

    def __init__(self, entity: CrudEntity, session: AsyncSession, tenant: TenantContext | None):
        self.entity = entity
        self.descriptor = entity.descriptor
        self.session = session
        self.tenant = tenant
        self.repo = EntityRepository(entity.descriptor, session)

    @property
    def hooks(self) -> Any:
        return self.descriptor.hooks

    def _hook_context(self) -> HookContext:
        return HookContext(session=self.session, tenant=self.tenant, entity=self.descriptor.name)

    def _identity(self, record: Any) -> str:
        return getattr(record, self.descriptor.identity_field)

    async def list(self, limit: int | None = None, offset: int = 0) -> list[Any]:
        """List visible records.

        Raises:
            ValidationError: If limit is outside 1..max page size or offset < 0.
        """
        settings = get_settings()
        if limit is None:
            limit = settings.crud_default_page_size
        if not 1 <= limit <= settings.crud_max_page_size:
            raise ValidationError.single(
                "limit", f"must be between 1 and {settings.crud_max_page_size}"
            )
        if offset < 0:
            raise ValidationError.single("offset", "must be greater than or equal to 0")

        tenancy.ensure_can_read(self.descriptor, self.tenant)
        return await self.repo.list_page(
            tenancy.read_conditions(self.descriptor, self.tenant),
            limit=limit,
            offset=offset,
            order_by=self.repo.default_order,
        )

    async def get(self, record_id: str) -> Any | None:
        """Get one visible record, or None when absent or out of scope."""
        tenancy.ensure_can_read(self.descriptor, self.tenant)
        return await self.repo.get_by_id(
            record_id, tenancy.read_conditions(self.descriptor, self.tenant)
        )

    async def create(self, fields: Any) -> Any:
        """Validate, run hooks, stamp identity and tenant, persist.

        Raises:
            ValidationError: Input fails the create contract.
            ConflictError: Storage rejected the insert.
            HookError: A hook failed.
        """
        tenancy.ensure_can_write(self.descriptor, self.tenant)
        data = validate_payload(self.entity.schemas.create, fields)

        ctx = self._hook_context()
        if self.hooks.before_create:
            data = await run_before_hook("before_create", self.hooks.before_create, ctx, data)

        await self._check_parent(data)
        data[self.descriptor.identity_field] = generate_id(self.descriptor.id_prefix)
        data.update(tenancy.stamp(self.descriptor, self.tenant))

        record = self.descriptor.model(**data)
        self.repo.add(record)
        await self._commit(record_id=data[self.descriptor.identity_field])
        await self.session.refresh(record)

        record_id = self._identity(record)
        logger.info(
            "Record created",
            entity=self.descriptor.name,
            id=record_id,
            tenant_id=self.tenant.tenant_id if self.tenant else None,
        )
        if self.hooks.after_create:
            await run_after_hook(
                "after_create", self.hooks.after_create, record, ctx, record_id=record_id
            )
        return record

    async def update(self, record_id: str, fields: Any) -> Any:
        """Apply a partial update to a record the caller owns.

        Raises:
            ValidationError: Input fails the update contract.
            NotFoundOrForbiddenError: No owned record has this id.
            ConflictError: Storage rejected the update.
            HookError: A hook failed.
        """
        tenancy.ensure_can_write(self.descriptor, self.tenant)
        data = validate_payload(self.entity.schemas.update, fields)
        record = await self._get_owned(record_id)

        ctx = self._hook_context()
        if self.hooks.before_update:
            data = await run_before_hook(
                "before_update", self.hooks.before_update, ctx, record_id, data
            )
        await self._check_parent(data)

        for key, value in data.items():
            setattr(record, key, value)
        await self._commit(record_id=record_id)
        await self.session.refresh(record)

        logger.info(
            "Record updated",
            entity=self.descriptor.name,
            id=record_id,
            fields=sorted(data),
        )
        if self.hooks.after_update:
            await run_after_hook(
                "after_update", self.hooks.after_update, record, ctx, record_id=record_id
            )
        return record

    async def delete(self, record_id: str) -> DeleteResult:
        """Delete a record the caller owns.

        Raises:
            NotFoundOrForbiddenError: No owned record has this id.
            ConflictError: Storage rejected the delete (e.g. still referenced).
            HookError: A hook failed.
        """
        tenancy.ensure_can_write(self.descriptor, self.tenant)
        record = await self._get_owned(record_id)

        ctx = self._hook_context()
        if self.hooks.before_delete:
            await run_before_hook("before_delete", self.hooks.before_delete, ctx, record_id)

        await self.repo.delete(record)
        await self._commit(record_id=record_id)

        logger.info("Record deleted", entity=self.descriptor.name, id=record_id)
        if self.hooks.after_delete:
            await run_after_hook(
                "after_delete", self.hooks.after_delete, record, ctx, record_id=record_id
            )
        return DeleteResult(id=record_id)

    async def _check_parent(self, data: dict[str, Any]) -> None:
        """Reject a parent reference the caller does not own."""
        scope = self.descriptor.parent_scope
        if scope is None or scope.column not in data:
            return
        parent_key = getattr(scope.parent, scope.parent_key)
        found = await self.session.execute(
            tenancy.owned_parent_keys(scope, self.tenant).where(parent_key == data[scope.column])
        )
        if found.scalar_one_or_none() is None:
            await self.session.rollback()
            raise ValidationError.single(scope.column, NOT_FOUND_OR_FORBIDDEN_MESSAGE)

    async def _get_owned(self, record_id: str) -> Any:
        record = await self.repo.get_by_id(
            record_id, tenancy.write_conditions(self.descriptor, self.tenant)
        )
        if record is None:
            logger.info("Record not found or access denied", entity=self.descriptor.name, id=record_id)
            raise NotFoundOrForbiddenError(self.descriptor.name, record_id)
        return record

    async def _commit(self, record_id: str) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info("Write conflict", entity=self.descriptor.name, id=record_id)
            raise ConflictError(f"{self.descriptor.name} write conflicts with existing data") from e
