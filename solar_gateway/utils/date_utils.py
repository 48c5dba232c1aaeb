"""Date manipulation utilities"""

from datetime import date


def add_months(from_date: date, months: int) -> date:
    """Add calendar months to a date, clamping to the first of the month"""
    month_index = from_date.month - 1 + months
    return date(from_date.year + month_index // 12, month_index % 12 + 1, 1)
