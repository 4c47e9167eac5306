"""Lifecycle hook invocation."""

import inspect
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.foodservice.core.logging import get_logger
from src.foodservice.crud.errors import CrudError, HookError
from src.foodservice.crud.tenancy import TenantContext

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HookContext:
    """What a hook may see: the open session, the caller, and the entity name."""

    session: AsyncSession
    tenant: TenantContext | None
    entity: str

    @property
    def tenant_id(self) -> str | None:
        return self.tenant.tenant_id if self.tenant else None


async def call_hook(hook: Any, *args: Any) -> Any:
    """Call ``hook`` and await the result when it is awaitable."""
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_before_hook(stage: str, hook: Any, ctx: HookContext, *args: Any) -> Any:
    """Run a ``before_*`` hook as ``hook(*args, ctx)``; nothing is committed yet.

    Any pending writes the hook made are rolled back on failure. Engine errors
    raised by the hook (for example a NotFoundOrForbiddenError from a parent
    lookup) propagate unchanged; anything else is wrapped.
    """
    try:
        return await call_hook(hook, *args, ctx)
    except CrudError:
        await ctx.session.rollback()
        raise
    except Exception as exc:
        await ctx.session.rollback()
        logger.warning("Hook failed", stage=stage, entity=ctx.entity, error=str(exc))
        raise HookError(stage, exc, committed=False) from exc


async def run_after_hook(
    stage: str, hook: Any, record: Any, ctx: HookContext, record_id: str | None = None
) -> None:
    """Run an ``after_*`` hook once the primary write is committed.

    The hook's own writes are committed on success and rolled back on
    failure; the primary write stays either way.
    """
    try:
        await call_hook(hook, record, ctx)
        await ctx.session.commit()
    except Exception as exc:
        await ctx.session.rollback()
        logger.exception("After hook failed", stage=stage, entity=ctx.entity, id=record_id)
        raise HookError(stage, exc, committed=True, record_id=record_id) from exc
