"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import TenantFactory, SiteFactory, ...
"""

from tests.factories.base import BaseFactory, new_id
from tests.factories.catalog import (
    DietTypeFactory,
    FoodCategoryFactory,
    IngredientFactory,
    PurchaseOrderFactory,
    UnitOfMeasureFactory,
    VendorFactory,
)
from tests.factories.tenant import SiteFactory, StationFactory, TenantFactory

__all__ = [
    # Base
    "BaseFactory",
    "new_id",
    # Organization
    "SiteFactory",
    "StationFactory",
    "TenantFactory",
    # Catalog
    "DietTypeFactory",
    "FoodCategoryFactory",
    "IngredientFactory",
    "PurchaseOrderFactory",
    "UnitOfMeasureFactory",
    "VendorFactory",
]
