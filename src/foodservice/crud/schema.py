"""Synthesize create/update validation contracts from table metadata.

Contracts are plain pydantic models built once per entity with
``pydantic.create_model``. They reject unknown keys, so a client can never
supply the identity field, the tenant field, or an omitted field.
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Column, String

from src.foodservice.core.logging import get_logger
from src.foodservice.crud.descriptor import EntityDescriptor
from src.foodservice.crud.errors import ValidationError

logger = get_logger(__name__)

_CONTRACT_CONFIG = ConfigDict(extra="forbid")


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """The slice of column metadata the synthesizer looks at."""

    name: str
    python_type: Any
    nullable: bool
    has_default: bool
    max_length: int | None = None

    @property
    def required(self) -> bool:
        return not self.nullable and not self.has_default

    @classmethod
    def from_column(cls, column: Column[Any]) -> "ColumnSpec":
        try:
            python_type: Any = column.type.python_type
        except NotImplementedError:
            python_type = Any
        max_length = column.type.length if isinstance(column.type, String) else None
        return cls(
            name=column.name,
            python_type=python_type,
            nullable=bool(column.nullable),
            has_default=column.default is not None or column.server_default is not None,
            max_length=max_length,
        )


@dataclass(frozen=True, slots=True)
class EntitySchemas:
    """Create and update contracts for one entity."""

    create: type[BaseModel]
    update: type[BaseModel]
    columns: tuple[ColumnSpec, ...]

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.columns if spec.required)


def writable_columns(descriptor: EntityDescriptor) -> tuple[ColumnSpec, ...]:
    """Columns a client may write, in table order."""
    table = descriptor.model.__table__  # type: ignore[attr-defined]
    excluded = {descriptor.identity_field}
    if descriptor.tenant_field:
        excluded.add(descriptor.tenant_field)

    unknown = descriptor.omitted_fields - set(table.columns.keys())
    if unknown:
        # Drift between descriptor and table is tolerated.
        logger.debug("Ignoring unknown omitted fields", entity=descriptor.name, fields=sorted(unknown))
    excluded |= descriptor.omitted_fields

    return tuple(
        ColumnSpec.from_column(column) for column in table.columns if column.name not in excluded
    )


def _field_info(spec: ColumnSpec, default: Any) -> Any:
    if spec.max_length is not None:
        return Field(default=default, max_length=spec.max_length)
    return Field(default=default)


def _create_field(spec: ColumnSpec) -> tuple[Any, Any]:
    if spec.required:
        return spec.python_type, _field_info(spec, ...)
    if spec.nullable:
        return spec.python_type | None, _field_info(spec, None)
    # Storage default applies when omitted; an explicit null is still rejected.
    return spec.python_type, _field_info(spec, None)


def _update_field(spec: ColumnSpec) -> tuple[Any, Any]:
    if spec.nullable:
        return spec.python_type | None, _field_info(spec, None)
    return spec.python_type, _field_info(spec, None)


def build_schemas(descriptor: EntityDescriptor) -> EntitySchemas:
    """Build the contracts for ``descriptor``. Deterministic for a given table."""
    columns = writable_columns(descriptor)
    model_name = descriptor.model.__name__

    create_fields: dict[str, Any] = {}
    update_fields: dict[str, Any] = {}
    for spec in columns:
        if spec.python_type is Any:
            create_fields[spec.name] = (Any, _field_info(spec, ... if spec.required else None))
            update_fields[spec.name] = (Any, _field_info(spec, None))
            continue
        create_fields[spec.name] = _create_field(spec)
        update_fields[spec.name] = _update_field(spec)

    create = create_model(f"{model_name}Create", __config__=_CONTRACT_CONFIG, **create_fields)
    update = create_model(f"{model_name}Update", __config__=_CONTRACT_CONFIG, **update_fields)
    return EntitySchemas(create=create, update=update, columns=columns)


def validate_payload(contract: type[BaseModel], data: Any) -> dict[str, Any]:
    """Validate ``data`` and return only the keys the caller actually sent.

    Raises:
        ValidationError: With per-field messages.
    """
    try:
        parsed = contract.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc
    return parsed.model_dump(exclude_unset=True)
