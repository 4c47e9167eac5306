"""Tests for CRUD errors and their HTTP mapping."""

import pytest
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.foodservice.core.exceptions import status_for
from src.foodservice.crud import (
    ConflictError,
    CrudError,
    HookError,
    NotFoundOrForbiddenError,
    PermissionDeniedError,
    TenantContextRequiredError,
    ValidationError,
)
from src.foodservice.crud.errors import NOT_FOUND_OR_FORBIDDEN_MESSAGE

pytestmark = pytest.mark.unit


class _Payload(BaseModel):
    name: str
    count: int


def _pydantic_error(data: dict) -> PydanticValidationError:
    with pytest.raises(PydanticValidationError) as exc_info:
        _Payload.model_validate(data)
    return exc_info.value


class TestValidationError:
    def test_from_pydantic_groups_by_field(self):
        error = ValidationError.from_pydantic(_pydantic_error({"count": "many"}))
        assert set(error.errors) == {"name", "count"}
        assert all(isinstance(msgs, list) and msgs for msgs in error.errors.values())

    def test_single(self):
        error = ValidationError.single("limit", "must be between 1 and 500")
        assert error.errors == {"limit": ["must be between 1 and 500"]}
        assert error.message == "must be between 1 and 500"

    def test_summary(self):
        error = ValidationError({"a": ["bad"], "b": ["worse", "worst"]})
        assert error.summary() == "a: bad; b: worse; b: worst"


def test_not_found_message_does_not_say_which():
    """Missing and foreign records read the same."""
    missing = NotFoundOrForbiddenError("diners", "DNR-missing")
    foreign = NotFoundOrForbiddenError("diners", "DNR-other-tenant")
    assert str(missing) == str(foreign) == NOT_FOUND_OR_FORBIDDEN_MESSAGE


def test_hook_error_message():
    error = HookError("after_create", RuntimeError("boom"), committed=True, record_id="PO-1")
    assert error.message == "after_create hook failed: boom"
    assert error.committed
    assert error.record_id == "PO-1"


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (ValidationError({"x": ["bad"]}), 422),
        (NotFoundOrForbiddenError(), 404),
        (ConflictError(), 409),
        (HookError("before_create", ValueError("x")), 400),
        (TenantContextRequiredError(), 401),
        (PermissionDeniedError(), 403),
        (CrudError(), 400),
    ],
)
def test_status_mapping(error: CrudError, status_code: int):
    assert status_for(error) == status_code
