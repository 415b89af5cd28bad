"""
Input coercion for API parameters.

Pagination values are coerced, never rejected: non-numeric input falls back
to the default and numbers are clamped into range. A malformed month raises
ValidationError.
"""

import re
from datetime import MAXYEAR, datetime
from typing import Any, Optional, Tuple

from core.config import config
from core.exceptions import ValidationError

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        try:
            return int(float(str(value).strip()))
        except (ValueError, OverflowError):
            return default


def coerce_page(value: Any) -> int:
    """
    Coerce a page number.

    Returns:
        Page number clamped to [1, max_page] (default page for non-numeric input)
    """
    page = _coerce_int(value, config.pagination.default_page)
    return min(max(1, page), config.pagination.max_page)


def coerce_per_page(value: Any) -> int:
    """
    Coerce a page size.

    Returns:
        Page size clamped to [1, max_per_page] (default for non-numeric input)
    """
    per_page = _coerce_int(value, config.pagination.default_per_page)
    return min(max(1, per_page), config.pagination.max_per_page)


def coerce_search(value: Optional[str]) -> str:
    """Normalize a free-text search term; None becomes the empty string."""
    if value is None:
        return ""
    return str(value).strip()


def parse_month(value: Optional[str], field: str = "month") -> Tuple[datetime, datetime]:
    """
    Parse a ``YYYY-MM`` month selector into a half-open UTC range.

    Args:
        value: Month string
        field: Field name for error messages

    Returns:
        (start, end) where start is the first instant of the month and end
        is the first instant of the following month

    Raises:
        ValidationError: If the month is missing or malformed
    """
    if not value:
        raise ValidationError(field, "Month is required", value)

    match = MONTH_PATTERN.match(str(value).strip())
    if not match:
        raise ValidationError(field, "Invalid month format. Expected YYYY-MM", value)

    year, month = int(match.group(1)), int(match.group(2))
    if year < 1:
        raise ValidationError(field, "Year must be positive", value)
    if not 1 <= month <= 12:
        raise ValidationError(field, "Month must be between 01 and 12", value)

    start = datetime(year, month, 1)
    if month == 12 and year == MAXYEAR:
        # no first instant after 9999-12; datetime.max is the exclusive bound
        end = datetime.max
    elif month == 12:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month + 1, 1)
    return start, end


def month_prefix(value: Optional[str], field: str = "month") -> str:
    """
    Validate a month selector and return its text prefix (``YYYY-MM-``).

    Raises:
        ValidationError: If the month is missing or malformed
    """
    start, _ = parse_month(value, field)
    return start.strftime("%Y-%m-")
