"""Diner service - admissions, diet orders, and discharge.

Simple get/update/delete of diners go through the generic CRUD engine.
This service owns the operations that must keep the diet assignment
history consistent with the diner row:

- ``create``: diner plus its initial diet assignment
- ``change_diet``: close the open assignment, open a new one, move the
  diner's current-diet pointer
- ``discharge``: close every open assignment and mark the diner Discharged

Each of these commits once, so a reader never sees a diner with zero or
two open assignments. The partial unique index on
``diet_assignments(diner_id) WHERE end_date IS NULL`` backs this up in
storage.
"""

from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.foodservice.core.ids import generate_id
from src.foodservice.core.logging import get_logger
from src.foodservice.crud.errors import (
    ConflictError,
    NotFoundOrForbiddenError,
    PermissionDeniedError,
    ValidationError,
)
from src.foodservice.crud.tenancy import TenantContext
from src.foodservice.models.base import utc_today
from src.foodservice.models.diners import DietAssignment, Diner
from src.foodservice.models.enums import DinerStatus, UserRole
from src.foodservice.repositories import DietAssignmentRepository, DinerRepository, TenantRepository
from src.foodservice.schemas.diner import DietChange, DinerCreate, DinerListFilter

logger = get_logger(__name__)

INITIAL_DIET_REASON = "Initial admission diet order"


class DinerService:
    """Diner domain service - business logic only."""

    def __init__(
        self,
        diner_repo: DinerRepository,
        assignment_repo: DietAssignmentRepository,
        tenant_repo: TenantRepository,
        session: AsyncSession,
        tenant: TenantContext,
    ):
        self.diner_repo = diner_repo
        self.assignment_repo = assignment_repo
        self.tenant_repo = tenant_repo
        self.session = session
        self.tenant = tenant

    @property
    def tenant_id(self) -> str:
        return self.tenant.tenant_id

    def _ensure_can_write(self) -> None:
        if self.tenant.role is UserRole.VIEWER:
            raise PermissionDeniedError()

    async def _get_diner(self, diner_id: str, *, for_update: bool = False) -> Diner:
        diner = await self.diner_repo.get_for_tenant(self.tenant_id, diner_id, for_update=for_update)
        if diner is None:
            logger.info("Diner not found or access denied", diner_id=diner_id)
            raise NotFoundOrForbiddenError("diners", diner_id)
        return diner

    async def _require_diet_type(self, diet_type_id: str, field: str) -> None:
        diet = await self.diner_repo.get_visible_diet_type(self.tenant_id, diet_type_id)
        if diet is None:
            raise ValidationError.single(field, f"Diet type {diet_type_id} not found")

    async def create(self, data: DinerCreate) -> Diner:
        """Create a diner and its initial diet assignment in one transaction.

        Raises:
            ValidationError: If the site is not the tenant's or the diet type
                is not visible to the tenant.
            ConflictError: If storage rejects the insert.
            PermissionDeniedError: If the caller is read-only.
        """
        self._ensure_can_write()
        site = await self.tenant_repo.get_site(self.tenant_id, data.site_id)
        if site is None:
            raise ValidationError.single("site_id", f"Site {data.site_id} not found")
        await self._require_diet_type(data.primary_diet_type_id, "primary_diet_type_id")

        diner = Diner(
            diner_id=generate_id("diner"),
            tenant_id=self.tenant_id,
            status=DinerStatus.ACTIVE,
            **data.model_dump(exclude_unset=True),
        )
        assignment = DietAssignment(
            assignment_id=generate_id("diet_assignment"),
            diner_id=diner.diner_id,
            diet_type_id=data.primary_diet_type_id,
            effective_date=data.admission_date or utc_today(),
            ordered_by=self.tenant.actor,
            reason=INITIAL_DIET_REASON,
            texture_modification=data.texture_modification,
            liquid_consistency=data.liquid_consistency,
            created_by=self.tenant.actor,
        )

        try:
            self.diner_repo.add(diner)
            await self.session.flush()
            self.assignment_repo.add(assignment)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Diner conflicts with existing data") from e

        await self.session.refresh(diner)
        logger.info(
            "Diner created",
            diner_id=diner.diner_id,
            diet_type_id=assignment.diet_type_id,
            effective_date=str(assignment.effective_date),
        )
        return diner

    async def change_diet(self, data: DietChange) -> DietAssignment:
        """Record a new diet order, closing the current one.

        The open assignment (if any) gets ``end_date = effective_date`` and a
        new open assignment is inserted; the diner's current-diet pointer and,
        when given, texture/liquid modifications follow.

        Raises:
            NotFoundOrForbiddenError: If the diner is not the tenant's.
            ValidationError: If the diet type is not visible, or the effective
                date falls before the current or a closed interval.
            ConflictError: If storage rejects the change.
        """
        self._ensure_can_write()
        diner = await self._get_diner(data.diner_id, for_update=True)
        await self._require_diet_type(data.diet_type_id, "diet_type_id")

        current = await self.assignment_repo.get_open(diner.diner_id)
        if current is not None and data.effective_date < current.effective_date:
            raise ValidationError.single(
                "effective_date",
                f"must not precede the current diet order ({current.effective_date.isoformat()})",
            )
        latest_end = await self.assignment_repo.latest_end_date(diner.diner_id)
        if latest_end is not None and data.effective_date < latest_end:
            raise ValidationError.single(
                "effective_date",
                f"must not precede the end of an earlier diet order ({latest_end.isoformat()})",
            )

        assignment = DietAssignment(
            assignment_id=generate_id("diet_assignment"),
            diner_id=diner.diner_id,
            created_by=self.tenant.actor,
            **data.model_dump(exclude={"diner_id"}),
        )
        try:
            closed = await self.assignment_repo.close_open(diner.diner_id, data.effective_date)
            self.assignment_repo.add(assignment)
            diner.primary_diet_type_id = data.diet_type_id
            if data.texture_modification:
                diner.texture_modification = data.texture_modification
            if data.liquid_consistency:
                diner.liquid_consistency = data.liquid_consistency
            self.diner_repo.add(diner)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Diet change conflicts with existing data") from e

        logger.info(
            "Diet changed",
            diner_id=diner.diner_id,
            diet_type_id=data.diet_type_id,
            effective_date=data.effective_date.isoformat(),
            closed=closed,
        )
        return assignment

    async def get_diet_history(self, diner_id: str) -> list[DietAssignment]:
        """All assignments for the diner, most recent effective date first."""
        await self._get_diner(diner_id)
        return await self.assignment_repo.list_for_diner(diner_id)

    async def discharge(self, diner_id: str, as_of: date | None = None) -> Diner:
        """Close every open assignment as of ``as_of`` and mark the diner Discharged.

        Raises:
            NotFoundOrForbiddenError: If the diner is not the tenant's.
            ValidationError: If ``as_of`` precedes the open assignment's start.
        """
        self._ensure_can_write()
        as_of = as_of or utc_today()
        diner = await self._get_diner(diner_id, for_update=True)

        current = await self.assignment_repo.get_open(diner.diner_id)
        if current is not None and as_of < current.effective_date:
            raise ValidationError.single(
                "as_of",
                f"must not precede the current diet order ({current.effective_date.isoformat()})",
            )

        try:
            closed = await self.assignment_repo.close_open(diner.diner_id, as_of)
            diner.status = DinerStatus.DISCHARGED
            self.diner_repo.add(diner)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Discharge conflicts with existing data") from e

        await self.session.refresh(diner)
        logger.info("Diner discharged", diner_id=diner.diner_id, as_of=as_of.isoformat(), closed=closed)
        return diner

    async def get_counts_by_status(self) -> dict[str, int]:
        """Diner counts per status, every status present, plus ``total``."""
        by_status = await self.diner_repo.count_by_status(self.tenant_id)
        counts = {status.value: by_status.get(status.value, 0) for status in DinerStatus}
        counts["total"] = sum(by_status.values())
        return counts

    async def list(self, filters: DinerListFilter | None = None) -> list[Diner]:
        """List diners, optionally filtered by site, status, type, or name."""
        filters = filters or DinerListFilter()
        return await self.diner_repo.list_filtered(
            self.tenant_id,
            site_id=filters.site_id,
            status=filters.status,
            diner_type=filters.diner_type,
            search=filters.search,
            limit=filters.limit,
            offset=filters.offset,
        )
