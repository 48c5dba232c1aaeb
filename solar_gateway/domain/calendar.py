"""Billing calendar shared by the payment runs"""

from datetime import date
from solar_gateway.utils.date_utils import add_months


class Calendar:
    """
    Owns the current billing month.

    Months are plain integers counted from start_month. Contracts store the
    month their next payment is due, so comparing against current_month is
    all a payment run needs. add_month() is the only mutator.
    """

    def __init__(self, start_month: int = 0, start_date: date = date(2020, 1, 1)):
        self._start_month = start_month
        self._current_month = start_month
        self._start_date = start_date

    @property
    def current_month(self) -> int:
        return self._current_month

    @property
    def current_date(self) -> date:
        """First day of the current billing month"""
        return add_months(self._start_date, self._current_month - self._start_month)

    def add_month(self) -> int:
        """Advance the calendar by one month and return the new month"""
        self._current_month += 1
        return self._current_month
