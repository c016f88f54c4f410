# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any

from app.exceptions import BadRequestError


# =============================================================================
# ID Utilities
# =============================================================================

def parse_id(value: Any, field: str) -> int:
    """
    Normalize an ID that may arrive as int or numeric string.

    Args:
        value: Raw value from a request body or path
        field: Field name used in the error message

    Returns:
        The ID as int

    Raises:
        BadRequestError: If the value is missing or not a positive integer

    Example:
        parse_id("12", "commissionerId")  # 12
    """
    if value is None or isinstance(value, bool):
        raise BadRequestError(f"Please provide {field}", details={"field": field})
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise BadRequestError(
            f"{field} must be an integer",
            details={"field": field, "value": str(value)},
        )
    if parsed <= 0:
        raise BadRequestError(
            f"{field} must be a positive integer",
            details={"field": field, "value": parsed},
        )
    return parsed


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not str(value).strip()
