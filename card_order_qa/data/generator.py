from datetime import date, timedelta
from typing import Optional

DATE_FORMAT = "%d.%m.%Y"

# 11 digits after the country sign
VALID_PHONE = "+79270000000"


def generate_date(offset_days: int, today: Optional[date] = None) -> str:
    """Return today's date shifted by ``offset_days``, formatted DD.MM.YYYY.

    Args:
        offset_days: Number of days to add; zero and negative values are allowed.
        today: Reference date, defaults to the system clock.
    """
    base = today or date.today()
    return (base + timedelta(days=offset_days)).strftime(DATE_FORMAT)


def generate_invalid_phone() -> str:
    """Return a phone number one digit short of the required 11."""
    return VALID_PHONE[:-1]
