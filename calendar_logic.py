"""Pure calendar calculations — no UI dependencies."""

import calendar
import logging
from datetime import date
from typing import NamedTuple

logger = logging.getLogger("mini_calendar.calendar_logic")

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY

# Navigable range; months outside [MIN_DATE's month, MAX_DATE's month] are rejected
MIN_DATE = date(1970, 1, 1)
MAX_DATE = date(2200, 1, 1)

_DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class Cell(NamedTuple):
    date: date
    in_current_month: bool


def day_headers(first_weekday: int = SUNDAY) -> list[str]:
    """Return the 7 column abbreviations starting at ``first_weekday``."""
    return [_DAY_ABBR[(first_weekday + i) % 7] for i in range(7)]


def month_grid(reference: date, first_weekday: int = SUNDAY) -> list[Cell]:
    """Return the cells for ``reference``'s month as whole weeks.

    Starts at the week containing the 1st and ends with the week containing
    the last day, so leading/trailing days from the adjacent months are
    included and flagged ``in_current_month=False``.
    The week start is explicit (Sunday by default), never taken from the locale.

    Padding days before 0001-01-01 or after 9999-12-31 cannot be represented
    and are left out, so only January 0001 and December 9999 can yield a grid
    that is not whole weeks.
    """
    cal = calendar.Calendar(firstweekday=first_weekday)
    year, month = reference.year, reference.month
    cells: list[Cell] = []
    for y, m, d in cal.itermonthdays3(year, month):
        if date.min.year <= y <= date.max.year:
            cells.append(Cell(date(y, m, d), m == month))
    return cells


def grid_weeks(cells: list[Cell]) -> list[list[Cell]]:
    """Split a flat grid into rows of 7."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def week_numbers(cells: list[Cell]) -> list[str]:
    """Return the ISO week number for each grid row.

    Every row holds exactly one Thursday, and ISO weeks are numbered by
    their Thursday, so that day labels the row whatever the week start.
    """
    weeks: list[str] = []
    for row in grid_weeks(cells):
        thursday = next((c.date for c in row if c.date.weekday() == 3), row[0].date)
        weeks.append(str(thursday.isocalendar()[1]))
    return weeks


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    return d.timetuple().tm_yday


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def month_in_bounds(d: date, min_date: date = MIN_DATE,
                    max_date: date = MAX_DATE) -> bool:
    """True if ``d``'s month lies within the months of [min_date, max_date]."""
    ym = (d.year, d.month)
    return (min_date.year, min_date.month) <= ym <= (max_date.year, max_date.month)


def step_month(current: date, direction: int,
               min_date: date = MIN_DATE,
               max_date: date = MAX_DATE) -> tuple[date, bool]:
    """Move one month forward (direction > 0) or backward (direction < 0).

    The day of month is clamped to the target month's length (Jan 31 -> Feb 28/29).
    Returns ``(new_date, True)``, or ``(current, False)`` when the target
    month is out of bounds. A zero direction is a no-op: ``(current, False)``.
    """
    if direction == 0:
        return current, False
    if direction < 0:
        year, month = prev_month(current.year, current.month)
    else:
        year, month = next_month(current.year, current.month)

    if not (date.min.year <= year <= date.max.year):
        logger.debug("Step from %s leaves the supported year range", current)
        return current, False

    last_day = calendar.monthrange(year, month)[1]
    target = date(year, month, min(current.day, last_day))
    if not month_in_bounds(target, min_date, max_date):
        logger.debug("Month step to %04d-%02d clamped at bounds", year, month)
        return current, False
    return target, True


def clamp_month(d: date, min_date: date = MIN_DATE,
                max_date: date = MAX_DATE) -> date:
    """Return the first of ``d``'s month, pulled into the months of the bounds."""
    first = d.replace(day=1)
    if not month_in_bounds(first, min_date, max_date):
        nearest = min_date if first < min_date else max_date
        logger.debug("Month %s moved into bounds at %s", first, nearest)
        first = nearest.replace(day=1)
    return first
