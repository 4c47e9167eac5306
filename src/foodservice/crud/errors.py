"""Typed errors raised by the CRUD engine.

Handlers in ``src.foodservice.core.exceptions`` map each class to an HTTP
status; the engine itself is transport-agnostic.
"""

from typing import Any

NOT_FOUND_OR_FORBIDDEN_MESSAGE = "Record not found or access denied"


class CrudError(Exception):
    """Base class for every error the engine raises on purpose."""

    message: str = "CRUD operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(CrudError):
    """Input failed a synthesized create/update contract.

    ``errors`` maps field name to its messages; ``__root__`` holds
    errors that are not tied to a single field.
    """

    message = "Validation failed"

    def __init__(self, errors: dict[str, list[str]], message: str | None = None):
        super().__init__(message)
        self.errors = errors

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        """Build from a ``pydantic.ValidationError``."""
        errors: dict[str, list[str]] = {}
        for item in exc.errors():
            field = ".".join(str(part) for part in item["loc"]) or "__root__"
            errors.setdefault(field, []).append(item["msg"])
        return cls(errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]}, message=message)

    def summary(self) -> str:
        """Flatten to ``field: msg; field: msg`` for bulk result rows."""
        return "; ".join(
            f"{field}: {msg}" for field, messages in self.errors.items() for msg in messages
        )


class NotFoundOrForbiddenError(CrudError):
    """The record is absent or belongs to someone else.

    Both causes share one message so callers cannot probe for records
    owned by other tenants.
    """

    message = NOT_FOUND_OR_FORBIDDEN_MESSAGE

    def __init__(self, entity: str | None = None, record_id: str | None = None):
        super().__init__()
        self.entity = entity
        self.record_id = record_id


class ConflictError(CrudError):
    """Storage rejected the write with a uniqueness or integrity violation."""

    message = "Record conflicts with existing data"


class HookError(CrudError):
    """A lifecycle hook raised.

    ``committed`` is True when the primary write had already been committed
    before the failing ``after_*`` hook ran.
    """

    def __init__(
        self,
        stage: str,
        cause: BaseException,
        committed: bool = False,
        record_id: str | None = None,
    ):
        super().__init__(f"{stage} hook failed: {cause}")
        self.stage = stage
        self.cause = cause
        self.committed = committed
        self.record_id = record_id


class TenantContextRequiredError(CrudError):
    message = "Tenant context required"


class PermissionDeniedError(CrudError):
    message = "Insufficient permissions for this operation"
