"""Date manipulation utilities"""

import calendar
from datetime import MAXYEAR, MINYEAR, date
from typing import Tuple

from finance_tracker.domain.exceptions import InvalidDateError, InvalidMonthError


def add_months(from_date: date, months: int) -> date:
    """
    Shift a date by whole calendar months.

    When the day does not exist in the target month it collapses to that
    month's last day: 2024-01-31 + 1 month → 2024-02-29.

    Raises:
        InvalidDateError: If the result falls outside years 1-9999
    """
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidDateError(
            f"{from_date.isoformat()} shifted by {months} months falls outside years {MINYEAR}-{MAXYEAR}"
        )
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(from_date.day, last_day))


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Inclusive (first day, last day) of a calendar month"""
    if not 1 <= month <= 12:
        raise InvalidMonthError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)
