"""
Calendar-day helpers.

A calendar day is identified by year, month and day only. Stored availability
comes in several shapes (plain ``YYYY-MM-DD`` strings, browser timestamps such
as ``2024-03-03T23:00:00.000Z``, ``date``/``datetime`` objects), so everything
entering the engines is normalized to a ``pendulum.Date`` here first.
"""

from datetime import date, datetime
from typing import Iterable, List, Literal, Union

import pendulum
from pendulum import Date

from .exceptions import InvalidDateError

DateInput = Union[str, date, datetime]
OutputFormat = Literal["date", "timestamp"]

DEFAULT_TIMEZONE = "Europe/Paris"


def calendar_day(year: int, month: int, day: int) -> Date:
    """Build a calendar day, rejecting impossible dates."""
    try:
        return pendulum.date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid calendar day {year:04d}-{month:02d}-{day:02d}: {exc}") from exc


def to_calendar_date(value: DateInput, timezone: str = DEFAULT_TIMEZONE) -> Date:
    """
    Normalize a date-like value to the calendar day it denotes.

    Timestamps carrying an offset are read in ``timezone`` before the day is
    taken, so local midnight stored as UTC lands back on the intended day.
    Naive timestamps and date-only values keep their own day.

    Raises:
        InvalidDateError: If the value cannot be read as a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = pendulum.instance(value).in_timezone(timezone)
        return calendar_day(value.year, value.month, value.day)

    if isinstance(value, date):
        return calendar_day(value.year, value.month, value.day)

    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"Cannot read {value!r} as a calendar date")

    try:
        parsed = pendulum.parse(value.strip(), tz=timezone, exact=True)
    except ValueError as exc:
        raise InvalidDateError(f"Cannot read {value!r} as a calendar date: {exc}") from exc

    if isinstance(parsed, datetime):
        local = parsed.in_timezone(timezone)
        return calendar_day(local.year, local.month, local.day)
    if isinstance(parsed, date):
        return calendar_day(parsed.year, parsed.month, parsed.day)

    raise InvalidDateError(f"{value!r} is not a date")


def parse_month(value: DateInput, timezone: str = DEFAULT_TIMEZONE) -> Date:
    """Read ``YYYY-MM`` (or any full date) as the first day of that month."""
    if isinstance(value, str) and len(value.strip()) == 7:
        try:
            parsed = pendulum.from_format(value.strip(), "YYYY-MM")
        except ValueError as exc:
            raise InvalidDateError(f"Cannot read {value!r} as a month: {exc}") from exc
        return calendar_day(parsed.year, parsed.month, 1)
    return month_start(to_calendar_date(value, timezone))


def month_start(day: Date) -> Date:
    """First day of the month containing ``day``."""
    return calendar_day(day.year, day.month, 1)


def days_of_month(ref: Date) -> List[Date]:
    """Every calendar day of ``ref``'s month, in order (28 to 31 days)."""
    first = month_start(ref)
    return [first.add(days=offset) for offset in range(first.days_in_month)]


def week_from(anchor: Date, length: int = 7) -> List[Date]:
    """``anchor`` and the following days, ``length`` days in total."""
    return [anchor.add(days=offset) for offset in range(length)]


def format_calendar_date(
    day: Date,
    output_format: OutputFormat = "date",
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """
    Serialize a calendar day to its ISO-8601 external form.

    ``timestamp`` writes local midnight in ``timezone`` as a UTC instant,
    the inverse of how ``to_calendar_date`` reads timestamps back.
    """
    if output_format == "timestamp":
        midnight = pendulum.datetime(day.year, day.month, day.day, tz=timezone)
        return midnight.in_timezone("UTC").format("YYYY-MM-DD[T]HH:mm:ss.SSS[Z]")
    return day.isoformat()


def sort_calendar_dates(days: Iterable[Date]) -> List[Date]:
    """Ascending by (year, month, day)."""
    return sorted(days, key=lambda d: (d.year, d.month, d.day))
