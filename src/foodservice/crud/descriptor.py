"""Declarative per-entity configuration."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlmodel import SQLModel

if TYPE_CHECKING:
    from src.foodservice.crud.hooks import HookContext


class TenantMode(str, Enum):
    """How rows of an entity are scoped to tenants."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"


class Visibility(str, Enum):
    """Whether an entity may be read without a tenant context."""

    PUBLIC = "public"
    PROTECTED = "protected"


type Data = dict[str, Any]
type MaybeAwaitable[T] = T | Awaitable[T]

type BeforeCreate = Callable[[Data, "HookContext"], MaybeAwaitable[Data]]
type AfterCreate = Callable[[Any, "HookContext"], MaybeAwaitable[None]]
type BeforeUpdate = Callable[[str, Data, "HookContext"], MaybeAwaitable[Data]]
type AfterUpdate = Callable[[Any, "HookContext"], MaybeAwaitable[None]]
type BeforeDelete = Callable[[str, "HookContext"], MaybeAwaitable[None]]
type AfterDelete = Callable[[Any, "HookContext"], MaybeAwaitable[None]]


@dataclass(frozen=True, slots=True)
class Hooks:
    """Optional lifecycle callbacks; each may be sync or async.

    ``before_*`` hooks return the (possibly transformed) data; ``after_*``
    hooks receive the persisted record and run for side effects only.
    """

    before_create: BeforeCreate | None = None
    after_create: AfterCreate | None = None
    before_update: BeforeUpdate | None = None
    after_update: AfterUpdate | None = None
    before_delete: BeforeDelete | None = None
    after_delete: AfterDelete | None = None


@dataclass(frozen=True, slots=True)
class ParentScope:
    """Tenant scoping through a parent row, for tables with no tenant column.

    Rows are visible and writable only when ``column`` points at a
    ``parent`` row whose ``parent_tenant_field`` is the caller's tenant.
    """

    column: str
    parent: type[SQLModel]
    parent_key: str
    parent_tenant_field: str = "tenant_id"


@dataclass(frozen=True, slots=True)
class EntityDescriptor:
    """Static description of one entity, created once at startup."""

    name: str
    model: type[SQLModel]
    identity_field: str
    id_prefix: str
    tenant_field: str | None = None
    tenant_mode: TenantMode = TenantMode.NONE
    omitted_fields: frozenset[str] = field(default_factory=frozenset)
    visibility: Visibility = Visibility.PROTECTED
    hooks: Hooks = field(default_factory=Hooks)
    order_by: str | None = None
    path: str | None = None
    parent_scope: ParentScope | None = None

    def __post_init__(self) -> None:
        if self.tenant_mode is not TenantMode.NONE and not self.tenant_field:
            raise ValueError(f"{self.name}: tenant_mode={self.tenant_mode.value} needs tenant_field")
        columns = self.model.__table__.columns  # type: ignore[attr-defined]
        if self.identity_field not in columns:
            raise ValueError(f"{self.name}: unknown identity field '{self.identity_field}'")
        if self.tenant_field and self.tenant_field not in columns:
            raise ValueError(f"{self.name}: unknown tenant field '{self.tenant_field}'")
        if self.order_by and self.order_by not in columns:
            raise ValueError(f"{self.name}: unknown order_by column '{self.order_by}'")
        if self.parent_scope and self.parent_scope.column not in columns:
            raise ValueError(f"{self.name}: unknown parent scope column '{self.parent_scope.column}'")
        # Accept any iterable of names but store it frozen.
        object.__setattr__(self, "omitted_fields", frozenset(self.omitted_fields))

    @property
    def url_path(self) -> str:
        """Router prefix, always with a leading slash."""
        return "/" + (self.path or self.name).lstrip("/")

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC

    @property
    def is_tenant_scoped(self) -> bool:
        return self.tenant_mode is not TenantMode.NONE
