from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from sqlalchemy import Column
from sqlalchemy import Enum as SAEnum


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for TIMESTAMP WITHOUT TIME ZONE).

    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def utc_today() -> date:
    """Return the current UTC calendar date."""
    return datetime.now(UTC).date()


def enum_column(
    enum_class: type[Enum],
    *,
    nullable: bool = True,
    default: Enum | None = None,
    index: bool = False,
) -> Column[Any]:
    """Build a VARCHAR-backed enum column that stores member values.

    The column's ``python_type`` is the enum class itself, which is what lets
    the schema synthesizer turn it into a closed set of allowed values.
    """
    return Column(
        SAEnum(
            enum_class,
            native_enum=False,
            validate_strings=True,
            values_callable=lambda members: [member.value for member in members],
        ),
        nullable=nullable,
        default=default,
        index=index,
    )
