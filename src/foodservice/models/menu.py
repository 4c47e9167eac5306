"""Menu planning models - optional tenant (system-wide rows plus tenant rows)."""

from sqlmodel import Field, SQLModel

from src.foodservice.models.base import enum_column
from src.foodservice.models.enums import ActiveStatus, DietCategory


class MealPeriod(SQLModel, table=True):
    __tablename__ = "meal_periods"

    meal_period_id: str = Field(primary_key=True, max_length=32)
    tenant_id: str | None = Field(
        default=None, foreign_key="tenants.tenant_id", index=True, max_length=32
    )
    meal_period_name: str = Field(max_length=100)
    typical_start_time: str = Field(max_length=5)
    typical_end_time: str = Field(max_length=5)
    target_calories_min: int | None = Field(default=None)
    target_calories_max: int | None = Field(default=None)
    is_required: bool = Field(default=True)
    sort_order: int
    notes: str | None = Field(default=None)


class DietType(SQLModel, table=True):
    """Diet order definition. A null tenant marks a system-wide diet."""

    __tablename__ = "diet_types"

    diet_type_id: str = Field(primary_key=True, max_length=32)
    tenant_id: str | None = Field(
        default=None, foreign_key="tenants.tenant_id", index=True, max_length=32
    )
    diet_type_name: str = Field(max_length=100)
    diet_category: DietCategory = Field(sa_column=enum_column(DietCategory, nullable=False))
    description: str
    restrictions: str | None = Field(default=None)
    required_modifications: str | None = Field(default=None)
    calorie_target: int | None = Field(default=None)
    sodium_limit_mg: int | None = Field(default=None)
    carb_limit_g: int | None = Field(default=None)
    requires_dietitian_approval: bool = Field(default=False)
    status: ActiveStatus = Field(
        default=ActiveStatus.ACTIVE,
        sa_column=enum_column(ActiveStatus, nullable=False, default=ActiveStatus.ACTIVE),
    )
    notes: str | None = Field(default=None)
