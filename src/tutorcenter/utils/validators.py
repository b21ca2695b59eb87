"""Data validation helpers.

Functions:
- validate_email(email) -> bool: Loose email shape check
- parse_month(month) -> (year, month): Parse a "YYYY-MM" calendar month
"""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")
MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


class InvalidMonthError(ValueError):
    """Raised when a calendar month is not in YYYY-MM form."""

    def __init__(self, month: str):
        self.month = month
        super().__init__(f"Invalid month '{month}', expected YYYY-MM")


def validate_email(email: str) -> bool:
    """Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if the address looks valid, False otherwise
    """
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email))


def parse_month(month: str) -> tuple[int, int]:
    """Parse a calendar month.

    Args:
        month: "YYYY-MM" (e.g., "2025-03")

    Returns:
        (year, month) tuple

    Raises:
        InvalidMonthError: If the value is malformed or the month is out of range
    """
    match = MONTH_PATTERN.match(month)
    if match is None:
        raise InvalidMonthError(month)

    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12:
        raise InvalidMonthError(month)

    return year, month_number
