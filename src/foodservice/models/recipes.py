from sqlmodel import Field, SQLModel

from src.foodservice.models.base import enum_column
from src.foodservice.models.enums import IngredientStatus, StorageType


class Ingredient(SQLModel, table=True):
    """Purchasable ingredient. System-wide when ``tenant_id`` is null."""

    __tablename__ = "ingredients"

    ingredient_id: str = Field(primary_key=True, max_length=32)
    tenant_id: str | None = Field(
        default=None, foreign_key="tenants.tenant_id", index=True, max_length=32
    )
    ingredient_name: str = Field(max_length=200, index=True)
    fdc_id: int | None = Field(default=None)
    food_category_id: str = Field(foreign_key="food_categories.category_id", max_length=32)
    common_unit: str = Field(foreign_key="units_of_measure.unit_id", max_length=32)
    purchase_unit: str = Field(max_length=50)
    purchase_unit_cost: float | None = Field(default=None)
    units_per_purchase_unit: float | None = Field(default=None)
    storage_type: StorageType | None = Field(default=None, sa_column=enum_column(StorageType))
    shelf_life_days: int | None = Field(default=None)
    par_level: float | None = Field(default=None)
    reorder_point: float | None = Field(default=None)
    allergen_flags: str | None = Field(default=None)
    is_local: bool | None = Field(default=False)
    is_organic: bool | None = Field(default=False)
    status: IngredientStatus = Field(
        default=IngredientStatus.ACTIVE,
        sa_column=enum_column(IngredientStatus, nullable=False, default=IngredientStatus.ACTIVE),
    )
    notes: str | None = Field(default=None)
