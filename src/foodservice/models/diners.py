"""Diner models and the effective-dated diet assignment history.

A diner's current diet lives in two places: the denormalized
``Diner.primary_diet_type_id`` pointer and the single open row
(``end_date IS NULL``) in ``diet_assignments``. Both are written together by
``DinerService`` inside one transaction.
"""

from datetime import date, datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from src.foodservice.models.base import enum_column, utc_now
from src.foodservice.models.enums import (
    DinerStatus,
    DinerType,
    FeedingAssistance,
    FreeReducedStatus,
    LiquidConsistency,
    TextureModification,
)


class Diner(SQLModel, table=True):
    """Individual being fed: patient, student, resident, staff, or visitor."""

    __tablename__ = "diners"

    diner_id: str = Field(primary_key=True, max_length=32)
    tenant_id: str = Field(foreign_key="tenants.tenant_id", index=True, max_length=32)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    site_id: str = Field(foreign_key="sites.site_id", index=True, max_length=32)
    room_number: str | None = Field(default=None, max_length=50)
    diner_type: DinerType = Field(sa_column=enum_column(DinerType, nullable=False, index=True))
    admission_date: date | None = Field(default=None)
    expected_discharge_date: date | None = Field(default=None)
    primary_diet_type_id: str = Field(
        foreign_key="diet_types.diet_type_id", index=True, max_length=32
    )
    texture_modification: TextureModification | None = Field(
        default=None, sa_column=enum_column(TextureModification)
    )
    liquid_consistency: LiquidConsistency | None = Field(
        default=None, sa_column=enum_column(LiquidConsistency)
    )
    allergies: str | None = Field(default=None)
    dislikes: str | None = Field(default=None)
    preferences: str | None = Field(default=None)
    special_instructions: str | None = Field(default=None)
    feeding_assistance: FeedingAssistance | None = Field(
        default=None, sa_column=enum_column(FeedingAssistance)
    )
    meal_ticket_number: str | None = Field(default=None, max_length=50)
    free_reduced_status: FreeReducedStatus | None = Field(
        default=None, sa_column=enum_column(FreeReducedStatus)
    )
    physician: str | None = Field(default=None, max_length=200)
    status: DinerStatus = Field(
        default=DinerStatus.ACTIVE,
        sa_column=enum_column(DinerStatus, nullable=False, default=DinerStatus.ACTIVE, index=True),
    )
    notes: str | None = Field(default=None)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class DietAssignment(SQLModel, table=True):
    """One validity interval ``[effective_date, end_date)`` of a diner's diet.

    Rows are append-only: once ``end_date`` is set the row is never changed.
    """

    __tablename__ = "diet_assignments"
    __table_args__ = (
        sa.Index("ix_diet_assignments_dates", "effective_date", "end_date"),
        # At most one open assignment per diner.
        sa.Index(
            "uq_diet_assignments_open_per_diner",
            "diner_id",
            unique=True,
            sqlite_where=sa.text("end_date IS NULL"),
            postgresql_where=sa.text("end_date IS NULL"),
        ),
    )

    assignment_id: str = Field(primary_key=True, max_length=32)
    diner_id: str = Field(
        foreign_key="diners.diner_id", ondelete="CASCADE", index=True, max_length=32
    )
    diet_type_id: str = Field(foreign_key="diet_types.diet_type_id", index=True, max_length=32)
    effective_date: date
    end_date: date | None = Field(default=None)
    ordered_by: str = Field(max_length=255)
    reason: str | None = Field(default=None)
    texture_modification: TextureModification | None = Field(
        default=None, sa_column=enum_column(TextureModification)
    )
    liquid_consistency: LiquidConsistency | None = Field(
        default=None, sa_column=enum_column(LiquidConsistency)
    )
    additional_restrictions: str | None = Field(default=None)
    created_date: datetime = Field(default_factory=utc_now)
    created_by: str = Field(max_length=255)
    notes: str | None = Field(default=None)

    @property
    def is_open(self) -> bool:
        return self.end_date is None
