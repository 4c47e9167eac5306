"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-01-01 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Enum columns are stored as VARCHAR holding the member value.
ENUM = sa.String(length=50)


def _id(length: int = 32) -> sqlmodel.sql.sqltypes.AutoString:
    return sqlmodel.sql.sqltypes.AutoString(length=length)


def _text() -> sqlmodel.sql.sqltypes.AutoString:
    return sqlmodel.sql.sqltypes.AutoString()


def upgrade() -> None:
    # 1. Tenants
    op.create_table(
        "tenants",
        sa.Column("tenant_id", _id(), nullable=False),
        sa.Column("tenant_name", _id(200), nullable=False),
        sa.Column("tenant_code", _id(), nullable=False),
        sa.Column("contact_name", _id(200), nullable=True),
        sa.Column("contact_email", _id(255), nullable=True),
        sa.Column("contact_phone", _id(50), nullable=True),
        sa.Column("country_code", _id(2), nullable=False),
        sa.Column("subscription_tier", ENUM, nullable=False),
        sa.Column("segment", ENUM, nullable=False),
        sa.Column("max_sites", sa.Integer(), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.PrimaryKeyConstraint("tenant_id"),
    )
    op.create_index("ix_tenants_tenant_code", "tenants", ["tenant_code"], unique=True)

    # 2. Universal reference data
    op.create_table(
        "units_of_measure",
        sa.Column("unit_id", _id(), nullable=False),
        sa.Column("unit_name", _id(100), nullable=False),
        sa.Column("unit_abbreviation", _id(20), nullable=False),
        sa.Column("unit_type", ENUM, nullable=False),
        sa.Column("conversion_to_base", sa.Float(), nullable=True),
        sa.Column("base_unit", _id(20), nullable=True),
        sa.PrimaryKeyConstraint("unit_id"),
        sa.UniqueConstraint("unit_name"),
    )
    op.create_table(
        "food_categories",
        sa.Column("category_id", _id(), nullable=False),
        sa.Column("category_name", _id(100), nullable=False),
        sa.Column("storage_type", ENUM, nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("category_id"),
        sa.UniqueConstraint("category_name"),
    )
    op.create_table(
        "allergens",
        sa.Column("allergen_id", _id(), nullable=False),
        sa.Column("allergen_name", _id(100), nullable=False),
        sa.Column("is_major_allergen", sa.Boolean(), nullable=False),
        sa.Column("common_sources", _text(), nullable=True),
        sa.Column("cross_contact_risk", _text(), nullable=True),
        sa.PrimaryKeyConstraint("allergen_id"),
        sa.UniqueConstraint("allergen_name"),
    )

    # 3. Organization
    op.create_table(
        "sites",
        sa.Column("site_id", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=False),
        sa.Column("site_name", _id(200), nullable=False),
        sa.Column("site_type", ENUM, nullable=False),
        sa.Column("address", _id(500), nullable=True),
        sa.Column("capacity_seats", sa.Integer(), nullable=True),
        sa.Column("has_production_kitchen", sa.Boolean(), nullable=False),
        sa.Column("manager_name", _id(200), nullable=True),
        sa.Column("phone", _id(50), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.PrimaryKeyConstraint("site_id"),
    )
    op.create_index("ix_sites_tenant_id", "sites", ["tenant_id"], unique=False)

    op.create_table(
        "stations",
        sa.Column("station_id", _id(), nullable=False),
        sa.Column("site_id", _id(), nullable=False),
        sa.Column("station_name", _id(200), nullable=False),
        sa.Column("station_type", ENUM, nullable=False),
        sa.Column("capacity_covers_per_hour", sa.Integer(), nullable=True),
        sa.Column("requires_temp_log", sa.Boolean(), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["site_id"], ["sites.site_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("station_id"),
    )
    op.create_index("ix_stations_site_id", "stations", ["site_id"], unique=False)

    op.create_table(
        "employees",
        sa.Column("employee_id", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=False),
        sa.Column("first_name", _id(100), nullable=False),
        sa.Column("last_name", _id(100), nullable=False),
        sa.Column("primary_site_id", _id(), nullable=False),
        sa.Column("job_title", ENUM, nullable=False),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("hourly_rate", sa.Float(), nullable=True),
        sa.Column("certifications", _text(), nullable=True),
        sa.Column("certification_expiry", sa.Date(), nullable=True),
        sa.Column("phone", _id(50), nullable=True),
        sa.Column("email", _id(255), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["primary_site_id"], ["sites.site_id"]),
        sa.PrimaryKeyConstraint("employee_id"),
    )
    op.create_index("ix_employees_tenant_id", "employees", ["tenant_id"], unique=False)

    # 4. Menu planning and recipes (optional tenant)
    op.create_table(
        "meal_periods",
        sa.Column("meal_period_id", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=True),
        sa.Column("meal_period_name", _id(100), nullable=False),
        sa.Column("typical_start_time", _id(5), nullable=False),
        sa.Column("typical_end_time", _id(5), nullable=False),
        sa.Column("target_calories_min", sa.Integer(), nullable=True),
        sa.Column("target_calories_max", sa.Integer(), nullable=True),
        sa.Column("is_required", sa.Boolean(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.PrimaryKeyConstraint("meal_period_id"),
    )
    op.create_index("ix_meal_periods_tenant_id", "meal_periods", ["tenant_id"], unique=False)

    op.create_table(
        "diet_types",
        sa.Column("diet_type_id", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=True),
        sa.Column("diet_type_name", _id(100), nullable=False),
        sa.Column("diet_category", ENUM, nullable=False),
        sa.Column("description", _text(), nullable=False),
        sa.Column("restrictions", _text(), nullable=True),
        sa.Column("required_modifications", _text(), nullable=True),
        sa.Column("calorie_target", sa.Integer(), nullable=True),
        sa.Column("sodium_limit_mg", sa.Integer(), nullable=True),
        sa.Column("carb_limit_g", sa.Integer(), nullable=True),
        sa.Column("requires_dietitian_approval", sa.Boolean(), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.PrimaryKeyConstraint("diet_type_id"),
    )
    op.create_index("ix_diet_types_tenant_id", "diet_types", ["tenant_id"], unique=False)

    op.create_table(
        "ingredients",
        sa.Column("ingredient_id", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=True),
        sa.Column("ingredient_name", _id(200), nullable=False),
        sa.Column("fdc_id", sa.Integer(), nullable=True),
        sa.Column("food_category_id", _id(), nullable=False),
        sa.Column("common_unit", _id(), nullable=False),
        sa.Column("purchase_unit", _id(50), nullable=False),
        sa.Column("purchase_unit_cost", sa.Float(), nullable=True),
        sa.Column("units_per_purchase_unit", sa.Float(), nullable=True),
        sa.Column("storage_type", ENUM, nullable=True),
        sa.Column("shelf_life_days", sa.Integer(), nullable=True),
        sa.Column("par_level", sa.Float(), nullable=True),
        sa.Column("reorder_point", sa.Float(), nullable=True),
        sa.Column("allergen_flags", _text(), nullable=True),
        sa.Column("is_local", sa.Boolean(), nullable=True),
        sa.Column("is_organic", sa.Boolean(), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["food_category_id"], ["food_categories.category_id"]),
        sa.ForeignKeyConstraint(["common_unit"], ["units_of_measure.unit_id"]),
        sa.PrimaryKeyConstraint("ingredient_id"),
    )
    op.create_index("ix_ingredients_tenant_id", "ingredients", ["tenant_id"], unique=False)
    op.create_index(
        "ix_ingredients_ingredient_name", "ingredients", ["ingredient_name"], unique=False
    )

    # 5. Diners and the diet assignment history
    op.create_table(
        "diners",
        sa.Column("diner_id", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=False),
        sa.Column("first_name", _id(100), nullable=False),
        sa.Column("last_name", _id(100), nullable=False),
        sa.Column("site_id", _id(), nullable=False),
        sa.Column("room_number", _id(50), nullable=True),
        sa.Column("diner_type", ENUM, nullable=False),
        sa.Column("admission_date", sa.Date(), nullable=True),
        sa.Column("expected_discharge_date", sa.Date(), nullable=True),
        sa.Column("primary_diet_type_id", _id(), nullable=False),
        sa.Column("texture_modification", ENUM, nullable=True),
        sa.Column("liquid_consistency", ENUM, nullable=True),
        sa.Column("allergies", _text(), nullable=True),
        sa.Column("dislikes", _text(), nullable=True),
        sa.Column("preferences", _text(), nullable=True),
        sa.Column("special_instructions", _text(), nullable=True),
        sa.Column("feeding_assistance", ENUM, nullable=True),
        sa.Column("meal_ticket_number", _id(50), nullable=True),
        sa.Column("free_reduced_status", ENUM, nullable=True),
        sa.Column("physician", _id(200), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["site_id"], ["sites.site_id"]),
        sa.ForeignKeyConstraint(["primary_diet_type_id"], ["diet_types.diet_type_id"]),
        sa.PrimaryKeyConstraint("diner_id"),
    )
    op.create_index("ix_diners_tenant_id", "diners", ["tenant_id"], unique=False)
    op.create_index("ix_diners_site_id", "diners", ["site_id"], unique=False)
    op.create_index("ix_diners_diner_type", "diners", ["diner_type"], unique=False)
    op.create_index(
        "ix_diners_primary_diet_type_id", "diners", ["primary_diet_type_id"], unique=False
    )
    op.create_index("ix_diners_status", "diners", ["status"], unique=False)

    op.create_table(
        "diet_assignments",
        sa.Column("assignment_id", _id(), nullable=False),
        sa.Column("diner_id", _id(), nullable=False),
        sa.Column("diet_type_id", _id(), nullable=False),
        sa.Column("effective_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("ordered_by", _id(255), nullable=False),
        sa.Column("reason", _text(), nullable=True),
        sa.Column("texture_modification", ENUM, nullable=True),
        sa.Column("liquid_consistency", ENUM, nullable=True),
        sa.Column("additional_restrictions", _text(), nullable=True),
        sa.Column("created_date", sa.DateTime(), nullable=False),
        sa.Column("created_by", _id(255), nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["diner_id"], ["diners.diner_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["diet_type_id"], ["diet_types.diet_type_id"]),
        sa.PrimaryKeyConstraint("assignment_id"),
    )
    op.create_index("ix_diet_assignments_diner_id", "diet_assignments", ["diner_id"], unique=False)
    op.create_index(
        "ix_diet_assignments_diet_type_id", "diet_assignments", ["diet_type_id"], unique=False
    )
    op.create_index(
        "ix_diet_assignments_dates",
        "diet_assignments",
        ["effective_date", "end_date"],
        unique=False,
    )
    # At most one open assignment per diner
    op.create_index(
        "uq_diet_assignments_open_per_diner",
        "diet_assignments",
        ["diner_id"],
        unique=True,
        sqlite_where=sa.text("end_date IS NULL"),
        postgresql_where=sa.text("end_date IS NULL"),
    )

    # 6. Procurement
    op.create_table(
        "vendors",
        sa.Column("vendor_id", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=False),
        sa.Column("vendor_name", _id(200), nullable=False),
        sa.Column("vendor_type", ENUM, nullable=False),
        sa.Column("contact_name", _id(200), nullable=True),
        sa.Column("phone", _id(50), nullable=False),
        sa.Column("email", _id(255), nullable=True),
        sa.Column("address", _id(500), nullable=True),
        sa.Column("delivery_days", _id(100), nullable=True),
        sa.Column("delivery_lead_time_days", sa.Integer(), nullable=True),
        sa.Column("minimum_order", sa.Float(), nullable=True),
        sa.Column("payment_terms", _id(100), nullable=True),
        sa.Column("account_number", _id(100), nullable=True),
        sa.Column("insurance_on_file", sa.Boolean(), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.PrimaryKeyConstraint("vendor_id"),
    )
    op.create_index("ix_vendors_tenant_id", "vendors", ["tenant_id"], unique=False)

    op.create_table(
        "purchase_orders",
        sa.Column("po_number", _id(), nullable=False),
        sa.Column("tenant_id", _id(), nullable=False),
        sa.Column("vendor_id", _id(), nullable=False),
        sa.Column("site_id", _id(), nullable=False),
        sa.Column("order_date", sa.Date(), nullable=False),
        sa.Column("requested_delivery_date", sa.Date(), nullable=False),
        sa.Column("actual_delivery_date", sa.Date(), nullable=True),
        sa.Column("ordered_by", _id(255), nullable=False),
        sa.Column("subtotal", sa.Float(), nullable=True),
        sa.Column("tax", sa.Float(), nullable=True),
        sa.Column("shipping", sa.Float(), nullable=True),
        sa.Column("total", sa.Float(), nullable=True),
        sa.Column("payment_terms", _id(100), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("delivery_instructions", _text(), nullable=True),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.tenant_id"]),
        sa.ForeignKeyConstraint(["vendor_id"], ["vendors.vendor_id"]),
        sa.ForeignKeyConstraint(["site_id"], ["sites.site_id"]),
        sa.PrimaryKeyConstraint("po_number"),
    )
    op.create_index("ix_purchase_orders_tenant_id", "purchase_orders", ["tenant_id"], unique=False)
    op.create_index("ix_purchase_orders_vendor_id", "purchase_orders", ["vendor_id"], unique=False)
    op.create_index("ix_purchase_orders_status", "purchase_orders", ["status"], unique=False)

    op.create_table(
        "po_line_items",
        sa.Column("line_item_id", _id(), nullable=False),
        sa.Column("po_number", _id(), nullable=False),
        sa.Column("ingredient_id", _id(), nullable=False),
        sa.Column("quantity_ordered", sa.Float(), nullable=False),
        sa.Column("unit_of_measure", _id(), nullable=False),
        sa.Column("unit_price", sa.Float(), nullable=False),
        sa.Column("extended_price", sa.Float(), nullable=False),
        sa.Column("quantity_received", sa.Float(), nullable=True),
        sa.Column("variance", sa.Float(), nullable=True),
        sa.Column("notes", _text(), nullable=True),
        sa.ForeignKeyConstraint(["po_number"], ["purchase_orders.po_number"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["ingredient_id"], ["ingredients.ingredient_id"]),
        sa.ForeignKeyConstraint(["unit_of_measure"], ["units_of_measure.unit_id"]),
        sa.PrimaryKeyConstraint("line_item_id"),
    )
    op.create_index("ix_po_line_items_po_number", "po_line_items", ["po_number"], unique=False)


def downgrade() -> None:
    op.drop_table("po_line_items")
    op.drop_table("purchase_orders")
    op.drop_table("vendors")
    op.drop_index("uq_diet_assignments_open_per_diner", table_name="diet_assignments")
    op.drop_table("diet_assignments")
    op.drop_table("diners")
    op.drop_table("ingredients")
    op.drop_table("diet_types")
    op.drop_table("meal_periods")
    op.drop_table("employees")
    op.drop_table("stations")
    op.drop_table("sites")
    op.drop_table("allergens")
    op.drop_table("food_categories")
    op.drop_table("units_of_measure")
    op.drop_table("tenants")
