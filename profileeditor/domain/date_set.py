"""
Availability editing: a set of calendar days built through single-day and
bulk selections.

Pure domain logic without any I/O. The engine only ever holds calendar days
(``pendulum.Date``), so set membership is exactly year/month/day equality.
"""

from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

import pendulum
from pendulum import Date

from .calendar_dates import (
    DEFAULT_TIMEZONE,
    DateInput,
    OutputFormat,
    days_of_month,
    format_calendar_date,
    month_start,
    sort_calendar_dates,
    to_calendar_date,
    week_from,
)


class BulkMode(str, Enum):
    """How a single pick on the calendar is interpreted."""
    NONE = "none"
    SINGLE = "single"
    WEEK = "week"


class DateSetEngine:
    """
    Working copy of a profile's availability.

    Selections:
    - toggle: add a day, or remove it if already selected
    - week: add a day and the six following ones (never removes)
    - month: add every day of a month (never removes), one-shot

    Bulk additions are unions, so a month added over a partly filled month
    can only be taken back day by day.
    """

    def __init__(
        self,
        dates: Iterable[DateInput] = (),
        *,
        timezone: str = DEFAULT_TIMEZONE,
        output_format: OutputFormat = "date",
        today: Optional[Date] = None,
    ):
        self.timezone = timezone
        self.output_format = output_format
        self.bulk_mode = BulkMode.NONE
        self._dates: Set[Date] = {to_calendar_date(d, timezone) for d in dates}

        if today is None:
            today = pendulum.today(timezone).date()
        self._month_cursor = month_start(to_calendar_date(today, timezone))

    # Selection

    def toggle_date(self, day: DateInput) -> bool:
        """
        Flip one day in or out of the set.

        Returns:
            True if the day is selected afterwards
        """
        day = self._coerce(day)
        if day in self._dates:
            self._dates.remove(day)
            return False
        self._dates.add(day)
        return True

    def select_week(self, anchor: DateInput) -> List[Date]:
        """
        Add ``anchor`` and the six days after it.

        Returns:
            The days that were not selected before, in order
        """
        return self._union(week_from(self._coerce(anchor)))

    def select_month(self, month_ref: Optional[DateInput] = None) -> List[Date]:
        """
        Add every day of the month containing ``month_ref``.

        Defaults to the month currently shown. Month selection is a one-shot
        action: any active bulk mode is dropped so the next pick toggles a
        single day again.

        Returns:
            The days that were not selected before, in order
        """
        ref = self._month_cursor if month_ref is None else self._coerce(month_ref)
        added = self._union(days_of_month(ref))
        self.bulk_mode = BulkMode.NONE
        return added

    def pick(self, day: DateInput) -> List[Date]:
        """
        Apply a calendar click according to the current bulk mode.

        Returns:
            The days added by the click (empty if it removed a day)
        """
        if self.bulk_mode is BulkMode.WEEK:
            return self.select_week(day)
        day = self._coerce(day)
        return [day] if self.toggle_date(day) else []

    def set_bulk_mode(self, mode: BulkMode | str) -> BulkMode:
        """Activate ``mode``; activating the current mode again switches back to none."""
        mode = BulkMode(mode)
        if mode is self.bulk_mode:
            self.bulk_mode = BulkMode.NONE
        else:
            self.bulk_mode = mode
        return self.bulk_mode

    def clear(self) -> None:
        self._dates.clear()

    # Month cursor

    @property
    def month_cursor(self) -> Date:
        """First day of the month currently shown."""
        return self._month_cursor

    def show_month(self, ref: DateInput) -> Date:
        self._month_cursor = month_start(self._coerce(ref))
        return self._month_cursor

    def next_month(self) -> Date:
        self._month_cursor = self._month_cursor.add(months=1)
        return self._month_cursor

    def previous_month(self) -> Date:
        self._month_cursor = self._month_cursor.subtract(months=1)
        return self._month_cursor

    # Views

    @property
    def count(self) -> int:
        return len(self._dates)

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, day: object) -> bool:
        try:
            return self._coerce(day) in self._dates  # type: ignore[arg-type]
        except ValueError:
            return False

    def selected_dates(self) -> List[Date]:
        """Selected days, ascending."""
        return sort_calendar_dates(self._dates)

    def preview(self, limit: int = 20) -> Tuple[List[Date], int]:
        """
        First ``limit`` selected days and how many more there are.
        """
        ordered = self.selected_dates()
        return ordered[:limit], max(len(ordered) - limit, 0)

    def commit(self) -> List[str]:
        """
        Canonical availability: ascending ISO-8601 strings, one per day.
        """
        return [format_calendar_date(d, self.output_format, self.timezone) for d in self.selected_dates()]

    # Internals

    def _coerce(self, value: DateInput) -> Date:
        return to_calendar_date(value, self.timezone)

    def _union(self, days: Iterable[Date]) -> List[Date]:
        added: List[Date] = []
        for day in days:
            if day not in self._dates:
                self._dates.add(day)
                added.append(day)
        return added
