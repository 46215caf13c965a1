"""
Service module for building the month calendar grid.

The grid always spans whole weeks: days of the previous month fill the first
row before the 1st and days of the next month fill the last row. Days of the
displayed month are annotated with their cycle phase, a "today" marker and
the colour of their first event.

Typical usage:
    >>> grid = build_month_grid(2024, 1, profile, store, today=date(2024, 1, 15))
    >>> for week in grid.weeks:
    ...     print([cell.day_number for cell in week])
"""
import calendar
from typing import Optional, Tuple
from datetime import MAXYEAR, MINYEAR, date, timedelta

from aws_lambda_powertools import Logger

from src.models.calendar import CalendarCell, CalendarGrid, WEEK_LENGTH
from src.models.cycle import CycleProfile
from src.services.constants import DEFAULT_EVENT_COLOR, EVENT_COLORS
from src.services.events import EventStore
from src.services.phase import classify_cycle_day
from src.services.utils import DateLike, calculate_cycle_day, to_date

logger = Logger()

def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """
    Move a (year, month) pair by a number of months.

    Example:
        >>> shift_month(2024, 1, -1)
        (2023, 12)
        >>> shift_month(2024, 12, 1)
        (2025, 1)
    """
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1

def event_color(event_type: str) -> str:
    """Dot colour for an event type, falling back to the accent colour."""
    key = getattr(event_type, "value", event_type)
    return EVENT_COLORS.get(key, DEFAULT_EVENT_COLOR)

def _build_month_cell(
    day: date,
    profile: CycleProfile,
    store: EventStore,
    today: date
) -> CalendarCell:
    cell = CalendarCell(
        date=day,
        day_number=day.day,
        in_current_month=True,
        is_today=day == today
    )
    if not profile.is_configured:
        return cell

    match = classify_cycle_day(calculate_cycle_day(profile, day))
    if match:
        cell.phase = match.key
        cell.phase_class = match.sub_stage

    day_events = store.on_date(day)
    if day_events:
        cell.event_dot = event_color(day_events[0].type)
    return cell

def build_month_grid(
    year: int,
    month: int,
    profile: CycleProfile,
    store: EventStore,
    today: Optional[DateLike] = None,
    first_weekday: int = calendar.SUNDAY
) -> CalendarGrid:
    """
    Build the day cells for a month.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        profile: Cycle configuration; when unconfigured cells carry no phase or event data
        store: Events to mark on the grid
        today: Date flagged as today, defaults to today
        first_weekday: Weekday shown in the first column (calendar.SUNDAY by default)

    Returns:
        CalendarGrid whose cell count is the smallest multiple of 7 holding
        the leading padding plus every day of the month

    Raises:
        ValueError: If month is not in 1-12 or the year is the first or last
            representable one (padding would leave the date range)
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if not MINYEAR < year < MAXYEAR:
        raise ValueError(f"Year out of range: {year}")
    if today is None:
        today = date.today()
    today = to_date(today)

    weekday, days_in_month = calendar.monthrange(year, month)
    leading = (weekday - first_weekday) % WEEK_LENGTH
    first_day = date(year, month, 1)

    cells = []
    for i in range(leading, 0, -1):
        day = first_day - timedelta(days=i)
        cells.append(CalendarCell(
            date=day,
            day_number=day.day,
            in_current_month=False
        ))

    for day_number in range(1, days_in_month + 1):
        cells.append(_build_month_cell(date(year, month, day_number), profile, store, today))

    total = -(-(leading + days_in_month) // WEEK_LENGTH) * WEEK_LENGTH
    last_day = date(year, month, days_in_month)
    for i in range(1, total - leading - days_in_month + 1):
        day = last_day + timedelta(days=i)
        cells.append(CalendarCell(
            date=day,
            day_number=day.day,
            in_current_month=False
        ))

    logger.debug("Built calendar grid", extra={
        "year": year,
        "month": month,
        "cells": len(cells),
        "configured": profile.is_configured
    })
    return CalendarGrid(year=year, month=month, cells=cells)
