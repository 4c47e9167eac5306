"""Universal reference data shared by every tenant."""

from sqlmodel import Field, SQLModel

from src.foodservice.models.base import enum_column
from src.foodservice.models.enums import StorageType, UnitType


class UnitOfMeasure(SQLModel, table=True):
    __tablename__ = "units_of_measure"

    unit_id: str = Field(primary_key=True, max_length=32)
    unit_name: str = Field(max_length=100, unique=True)
    unit_abbreviation: str = Field(max_length=20)
    unit_type: UnitType = Field(sa_column=enum_column(UnitType, nullable=False))
    conversion_to_base: float | None = Field(default=None)
    base_unit: str | None = Field(default=None, max_length=20)


class FoodCategory(SQLModel, table=True):
    __tablename__ = "food_categories"

    category_id: str = Field(primary_key=True, max_length=32)
    category_name: str = Field(max_length=100, unique=True)
    storage_type: StorageType | None = Field(default=None, sa_column=enum_column(StorageType))
    sort_order: int


class Allergen(SQLModel, table=True):
    __tablename__ = "allergens"

    allergen_id: str = Field(primary_key=True, max_length=32)
    allergen_name: str = Field(max_length=100, unique=True)
    is_major_allergen: bool = Field(default=True)
    common_sources: str | None = Field(default=None)
    cross_contact_risk: str | None = Field(default=None)
