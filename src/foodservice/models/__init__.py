"""Model exports - Lobby Pattern.

Import from here: `from src.foodservice.models import Diner, DietAssignment`.
Importing this package registers every table on ``SQLModel.metadata``.
"""

# Enums
from src.foodservice.models.enums import (
    DinerStatus,
    DinerType,
    PurchaseOrderStatus,
    TenantStatus,
    UserRole,
)

# Diners
from src.foodservice.models.diners import DietAssignment, Diner

# Menu
from src.foodservice.models.menu import DietType, MealPeriod

# Organization
from src.foodservice.models.organization import Employee, Site, Station, Tenant

# Procurement
from src.foodservice.models.procurement import PoLineItem, PurchaseOrder, Vendor

# Recipes
from src.foodservice.models.recipes import Ingredient

# Reference
from src.foodservice.models.reference import Allergen, FoodCategory, UnitOfMeasure

__all__ = [
    # Enums
    "DinerStatus",
    "DinerType",
    "PurchaseOrderStatus",
    "TenantStatus",
    "UserRole",
    # Diners
    "DietAssignment",
    "Diner",
    # Menu
    "DietType",
    "MealPeriod",
    # Organization
    "Employee",
    "Site",
    "Station",
    "Tenant",
    # Procurement
    "PoLineItem",
    "PurchaseOrder",
    "Vendor",
    # Recipes
    "Ingredient",
    # Reference
    "Allergen",
    "FoodCategory",
    "UnitOfMeasure",
]
