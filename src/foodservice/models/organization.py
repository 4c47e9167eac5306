"""Organization models - tenants and their physical structure.

Three isolation patterns coexist across the schema:

1. Universal (no ``tenant_id``): reference data shared by every tenant.
2. Optional tenant (nullable ``tenant_id``): system-wide rows plus tenant rows.
3. Required tenant (``tenant_id`` NOT NULL): operational data per tenant.
"""

from datetime import date, datetime

from sqlmodel import Field, SQLModel

from src.foodservice.models.base import enum_column, utc_now
from src.foodservice.models.enums import (
    EmployeeStatus,
    JobTitle,
    MarketSegment,
    SiteStatus,
    SiteType,
    StationStatus,
    StationType,
    SubscriptionTier,
    TenantStatus,
)


class Tenant(SQLModel, table=True):
    """Customer organization. Every tenant-scoped row references this table."""

    __tablename__ = "tenants"

    tenant_id: str = Field(primary_key=True, max_length=32)
    tenant_name: str = Field(max_length=200)
    tenant_code: str = Field(max_length=32, unique=True, index=True)
    contact_name: str | None = Field(default=None, max_length=200)
    contact_email: str | None = Field(default=None, max_length=255)
    contact_phone: str | None = Field(default=None, max_length=50)
    country_code: str = Field(default="US", max_length=2)
    subscription_tier: SubscriptionTier = Field(
        default=SubscriptionTier.STANDARD,
        sa_column=enum_column(SubscriptionTier, nullable=False, default=SubscriptionTier.STANDARD),
    )
    segment: MarketSegment = Field(
        default=MarketSegment.OTHER,
        sa_column=enum_column(MarketSegment, nullable=False, default=MarketSegment.OTHER),
    )
    max_sites: int | None = Field(default=5)
    status: TenantStatus = Field(
        default=TenantStatus.ACTIVE,
        sa_column=enum_column(TenantStatus, nullable=False, default=TenantStatus.ACTIVE),
    )
    created_at: datetime = Field(default_factory=utc_now)
    notes: str | None = Field(default=None)

    @property
    def is_usable(self) -> bool:
        """Whether callers acting for this tenant may use the API."""
        return self.status in (TenantStatus.ACTIVE, TenantStatus.TRIAL)


class Site(SQLModel, table=True):
    """Physical location: kitchen, dining hall, satellite, commissary."""

    __tablename__ = "sites"

    site_id: str = Field(primary_key=True, max_length=32)
    tenant_id: str = Field(foreign_key="tenants.tenant_id", index=True, max_length=32)
    site_name: str = Field(max_length=200)
    site_type: SiteType = Field(sa_column=enum_column(SiteType, nullable=False))
    address: str | None = Field(default=None, max_length=500)
    capacity_seats: int | None = Field(default=None)
    has_production_kitchen: bool = Field(default=False)
    manager_name: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    status: SiteStatus = Field(
        default=SiteStatus.ACTIVE,
        sa_column=enum_column(SiteStatus, nullable=False, default=SiteStatus.ACTIVE),
    )
    notes: str | None = Field(default=None)


class Station(SQLModel, table=True):
    """Service or production station within a site.

    Stations carry no tenant column; they belong to a tenant through their site.
    """

    __tablename__ = "stations"

    station_id: str = Field(primary_key=True, max_length=32)
    site_id: str = Field(foreign_key="sites.site_id", ondelete="CASCADE", index=True, max_length=32)
    station_name: str = Field(max_length=200)
    station_type: StationType = Field(sa_column=enum_column(StationType, nullable=False))
    capacity_covers_per_hour: int | None = Field(default=None)
    requires_temp_log: bool = Field(default=False)
    status: StationStatus = Field(
        default=StationStatus.ACTIVE,
        sa_column=enum_column(StationStatus, nullable=False, default=StationStatus.ACTIVE),
    )
    notes: str | None = Field(default=None)


class Employee(SQLModel, table=True):
    __tablename__ = "employees"

    employee_id: str = Field(primary_key=True, max_length=32)
    tenant_id: str = Field(foreign_key="tenants.tenant_id", index=True, max_length=32)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    primary_site_id: str = Field(foreign_key="sites.site_id", max_length=32)
    job_title: JobTitle = Field(sa_column=enum_column(JobTitle, nullable=False))
    hire_date: date
    hourly_rate: float | None = Field(default=None)
    certifications: str | None = Field(default=None)
    certification_expiry: date | None = Field(default=None)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    status: EmployeeStatus = Field(
        default=EmployeeStatus.ACTIVE,
        sa_column=enum_column(EmployeeStatus, nullable=False, default=EmployeeStatus.ACTIVE),
    )
    notes: str | None = Field(default=None)
