"""Bulk operation schemas for API request/response."""

from typing import Any

from pydantic import BaseModel, Field


class BulkCreateOptions(BaseModel):
    """Options for a bulk create call."""

    stop_on_error: bool = Field(
        default=False,
        description="Stop at the first failed row and return what was processed so far.",
    )
    skip_invalid_rows: bool = Field(
        default=True,
        description="Record invalid rows as failed and keep going.",
    )


class BulkDeleteOptions(BaseModel):
    """Options for a bulk delete call."""

    stop_on_error: bool = False


class BulkCreateRequest(BaseModel):
    """Schema for a bulk create call."""

    rows: list[dict[str, Any]]
    options: BulkCreateOptions = Field(default_factory=BulkCreateOptions)


class BulkDeleteRequest(BaseModel):
    """Schema for a bulk delete call."""

    ids: list[str]
    options: BulkDeleteOptions = Field(default_factory=BulkDeleteOptions)


class BulkItemResult(BaseModel):
    """Outcome for one row or id of a bulk call."""

    index: int
    id: str | None = None
    success: bool
    error: str | None = None


class BulkOperationResult(BaseModel):
    """Aggregated outcome of a bulk call.

    ``results`` holds one entry per processed item, in input order.
    """

    total: int
    successful: int = 0
    failed: int = 0
    results: list[BulkItemResult] = Field(default_factory=list)

    def record(self, item: BulkItemResult) -> None:
        self.results.append(item)
        if item.success:
            self.successful += 1
        else:
            self.failed += 1
