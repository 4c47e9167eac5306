"""Diner schemas for API request/response."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.foodservice.models.enums import (
    DinerStatus,
    DinerType,
    FeedingAssistance,
    FreeReducedStatus,
    LiquidConsistency,
    TextureModification,
)


class DinerCreate(BaseModel):
    """Schema for admitting/enrolling a diner with an initial diet."""

    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    site_id: str = Field(min_length=1, max_length=32)
    room_number: str | None = Field(default=None, max_length=50)
    diner_type: DinerType
    admission_date: date | None = None
    expected_discharge_date: date | None = None
    primary_diet_type_id: str = Field(min_length=1, max_length=32)
    texture_modification: TextureModification | None = None
    liquid_consistency: LiquidConsistency | None = None
    allergies: str | None = None
    dislikes: str | None = None
    preferences: str | None = None
    special_instructions: str | None = None
    feeding_assistance: FeedingAssistance | None = None
    meal_ticket_number: str | None = Field(default=None, max_length=50)
    free_reduced_status: FreeReducedStatus | None = None
    physician: str | None = Field(default=None, max_length=200)
    notes: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty or whitespace only")
        return v


class DietChangeBody(BaseModel):
    """Schema for a new diet order; the diner comes from the route."""

    model_config = ConfigDict(extra="forbid")

    diet_type_id: str = Field(min_length=1, max_length=32)
    effective_date: date
    ordered_by: str = Field(min_length=1, max_length=255)
    reason: str | None = None
    texture_modification: TextureModification | None = None
    liquid_consistency: LiquidConsistency | None = None
    additional_restrictions: str | None = None
    notes: str | None = None


class DietChange(DietChangeBody):
    """Schema for a new diet order on an existing diner."""

    diner_id: str = Field(min_length=1, max_length=32)


class DischargeRequest(BaseModel):
    """Close every open diet order as of ``as_of`` (today when omitted)."""

    as_of: date | None = None


class DinerListFilter(BaseModel):
    """Query filter for listing diners."""

    site_id: str | None = None
    status: DinerStatus | None = None
    diner_type: DinerType | None = None
    search: str | None = Field(default=None, max_length=100)
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class DinerRead(BaseModel):
    """Schema for reading a diner."""

    model_config = ConfigDict(from_attributes=True)

    diner_id: str
    tenant_id: str
    first_name: str
    last_name: str
    site_id: str
    room_number: str | None
    diner_type: DinerType
    admission_date: date | None
    expected_discharge_date: date | None
    primary_diet_type_id: str
    texture_modification: TextureModification | None
    liquid_consistency: LiquidConsistency | None
    allergies: str | None
    dislikes: str | None
    preferences: str | None
    special_instructions: str | None
    feeding_assistance: FeedingAssistance | None
    meal_ticket_number: str | None
    free_reduced_status: FreeReducedStatus | None
    physician: str | None
    status: DinerStatus
    notes: str | None


class DietAssignmentRead(BaseModel):
    """Schema for reading one diet assignment interval."""

    model_config = ConfigDict(from_attributes=True)

    assignment_id: str
    diner_id: str
    diet_type_id: str
    effective_date: date
    end_date: date | None
    ordered_by: str
    reason: str | None
    texture_modification: TextureModification | None
    liquid_consistency: LiquidConsistency | None
    additional_restrictions: str | None
    created_date: datetime
    created_by: str
    notes: str | None


class DinerCounts(BaseModel):
    """Diner counts per status for dashboards."""

    counts: dict[str, int]
    total: int
