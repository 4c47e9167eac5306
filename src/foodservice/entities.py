"""Entity descriptors for the food-service domain.

Three isolation patterns:

- Universal reference data (tenant mode none, public): anyone may read,
  only admins may change.
- Optional tenant (nullable ``tenant_id``): system-wide rows shared by
  every tenant plus tenant-specific rows.
- Required tenant: operational data owned by exactly one tenant.

Stations and purchase order lines carry no tenant column and are scoped
through their parent site or order.
"""

from typing import Any

from src.foodservice.core.ids import ID_PREFIXES
from src.foodservice.crud import (
    EntityDescriptor,
    EntityRegistry,
    Hooks,
    ParentScope,
    TenantContextRequiredError,
    TenantMode,
    ValidationError,
    Visibility,
)
from src.foodservice.crud.hooks import HookContext
from src.foodservice.models import (
    Allergen,
    DietType,
    Diner,
    Employee,
    FoodCategory,
    Ingredient,
    MealPeriod,
    PoLineItem,
    PurchaseOrder,
    Site,
    Station,
    UnitOfMeasure,
    Vendor,
)
from src.foodservice.models.enums import DinerStatus
from src.foodservice.repositories import DietAssignmentRepository, TenantRepository
from src.foodservice.services import purchase_order_hooks as po_hooks

# Diet fields on a diner change only through DinerService.change_diet.
DINER_DIET_FIELDS = frozenset({"primary_diet_type_id", "texture_modification", "liquid_consistency"})

# Totals roll up from line items; status moves only through PurchaseOrderService.
PURCHASE_ORDER_DERIVED_FIELDS = frozenset({"subtotal", "total", "status"})


async def check_diner_update(
    diner_id: str, data: dict[str, Any], ctx: HookContext
) -> dict[str, Any]:
    """Keep generic diner updates off the discharge path and inside the tenant."""
    if data.get("status") == DinerStatus.DISCHARGED:
        raise ValidationError.single("status", "Discharge a diner through the discharge operation")
    if "site_id" in data:
        if ctx.tenant is None:
            raise TenantContextRequiredError()
        site = await TenantRepository(ctx.session).get_site(ctx.tenant.tenant_id, data["site_id"])
        if site is None:
            raise ValidationError.single("site_id", f"Site {data['site_id']} not found")
    return data


async def remove_diet_history(diner_id: str, ctx: HookContext) -> None:
    """Delete a diner's assignment rows ahead of the diner itself."""
    await DietAssignmentRepository(ctx.session).delete_for_diner(diner_id)


def _reference(
    name: str, model: type, identity_field: str, prefix_key: str, order_by: str
) -> EntityDescriptor:
    return EntityDescriptor(
        name=name,
        model=model,
        identity_field=identity_field,
        id_prefix=ID_PREFIXES[prefix_key],
        tenant_mode=TenantMode.NONE,
        visibility=Visibility.PUBLIC,
        order_by=order_by,
    )


def _tenant_owned(
    name: str,
    model: type,
    identity_field: str,
    prefix_key: str,
    mode: TenantMode = TenantMode.REQUIRED,
    **kwargs: object,
) -> EntityDescriptor:
    return EntityDescriptor(
        name=name,
        model=model,
        identity_field=identity_field,
        id_prefix=ID_PREFIXES[prefix_key],
        tenant_field="tenant_id",
        tenant_mode=mode,
        **kwargs,  # type: ignore[arg-type]
    )


def build_descriptors() -> list[EntityDescriptor]:
    """Every generic entity, in mount order."""
    return [
        # Reference (universal, public read)
        _reference("allergens", Allergen, "allergen_id", "allergen", "allergen_name"),
        _reference("units", UnitOfMeasure, "unit_id", "unit", "unit_name"),
        _reference("food-categories", FoodCategory, "category_id", "food_category", "sort_order"),
        # Organization
        _tenant_owned("sites", Site, "site_id", "site", order_by="site_name"),
        EntityDescriptor(
            name="stations",
            model=Station,
            identity_field="station_id",
            id_prefix=ID_PREFIXES["station"],
            tenant_mode=TenantMode.NONE,
            visibility=Visibility.PROTECTED,
            parent_scope=ParentScope(column="site_id", parent=Site, parent_key="site_id"),
            order_by="station_name",
        ),
        _tenant_owned("employees", Employee, "employee_id", "employee", order_by="last_name"),
        # Menu planning (system-wide + tenant rows)
        _tenant_owned(
            "meal-periods",
            MealPeriod,
            "meal_period_id",
            "meal_period",
            TenantMode.OPTIONAL,
            order_by="sort_order",
        ),
        _tenant_owned(
            "diet-types",
            DietType,
            "diet_type_id",
            "diet_type",
            TenantMode.OPTIONAL,
            order_by="diet_type_name",
        ),
        # Recipes
        _tenant_owned(
            "ingredients",
            Ingredient,
            "ingredient_id",
            "ingredient",
            TenantMode.OPTIONAL,
            order_by="ingredient_name",
        ),
        # Diners (create goes through DinerService)
        _tenant_owned(
            "diners",
            Diner,
            "diner_id",
            "diner",
            omitted_fields=DINER_DIET_FIELDS,
            hooks=Hooks(before_update=check_diner_update, before_delete=remove_diet_history),
            order_by="last_name",
        ),
        # Procurement
        _tenant_owned("vendors", Vendor, "vendor_id", "vendor", order_by="vendor_name"),
        _tenant_owned(
            "purchase-orders",
            PurchaseOrder,
            "po_number",
            "purchase_order",
            omitted_fields=PURCHASE_ORDER_DERIVED_FIELDS,
            hooks=Hooks(
                before_create=po_hooks.before_order_create,
                before_update=po_hooks.before_order_update,
                after_update=po_hooks.after_order_update,
            ),
            order_by="order_date",
        ),
        EntityDescriptor(
            name="po-line-items",
            model=PoLineItem,
            identity_field="line_item_id",
            id_prefix=ID_PREFIXES["po_line_item"],
            tenant_mode=TenantMode.NONE,
            visibility=Visibility.PROTECTED,
            omitted_fields=frozenset({"extended_price"}),
            parent_scope=ParentScope(
                column="po_number", parent=PurchaseOrder, parent_key="po_number"
            ),
            hooks=Hooks(
                before_create=po_hooks.before_line_item_create,
                after_create=po_hooks.after_line_item_change,
                before_update=po_hooks.before_line_item_update,
                after_update=po_hooks.after_line_item_change,
                before_delete=po_hooks.before_line_item_delete,
                after_delete=po_hooks.after_line_item_change,
            ),
        ),
    ]


def build_registry() -> EntityRegistry:
    """Build a fresh registry; called once per app (and per test)."""
    return EntityRegistry(build_descriptors())
