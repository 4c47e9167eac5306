"""Readable prefixed identifiers for every record.

Format: ``PREFIX-XXXXXXXXXX`` (prefix, dash, random alphanumeric suffix).
Uniqueness is ultimately enforced by the primary key constraint; a clash
surfaces from the storage layer as a ``ConflictError``.
"""

import re
import secrets
import string

from src.foodservice.core.config import get_settings

ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

ID_PREFIXES: dict[str, str] = {
    # Organization
    "tenant": "TEN",
    "site": "SITE",
    "station": "STN",
    "employee": "EMP",
    # Reference
    "allergen": "ALG",
    "unit": "UOM",
    "food_category": "CAT",
    # Menu planning
    "meal_period": "MP",
    "diet_type": "DIET",
    # Recipes
    "ingredient": "ING",
    # Diners
    "diner": "DNR",
    "diet_assignment": "DA",
    # Procurement
    "vendor": "VND",
    "purchase_order": "PO",
    "po_line_item": "POLI",
}

_PREFIX_PATTERN = re.compile(r"^[A-Z][A-Z0-9]{0,15}$")


def random_suffix(length: int) -> str:
    """Return ``length`` characters drawn from ALPHABET with the OS CSPRNG."""
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def generate_id(prefix: str, length: int | None = None) -> str:
    """Generate a prefixed identifier.

    Args:
        prefix: Literal prefix such as ``"DNR"``. Entity keys from
            ``ID_PREFIXES`` (``"diner"``) are resolved to their prefix.
        length: Suffix length; defaults to ``settings.id_random_length``.

    Returns:
        Identifier such as ``"DNR-A1b2C3d4E5"``.

    Raises:
        ValueError: If the prefix is not an uppercase alphanumeric token.
    """
    resolved = ID_PREFIXES.get(prefix, prefix)
    if not _PREFIX_PATTERN.match(resolved):
        raise ValueError(f"Invalid id prefix: {prefix!r}")
    if length is None:
        length = get_settings().id_random_length
    return f"{resolved}-{random_suffix(length)}"
