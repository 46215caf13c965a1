"""
Shared utility functions for cycle-related services.

These utilities are used across multiple service modules to handle common
operations like date normalization and cycle day calculation.
"""
from typing import Optional, Union
from datetime import date, datetime

from src.models.cycle import CycleProfile

DateLike = Union[date, datetime]

def to_date(value: DateLike) -> date:
    """
    Drop the time-of-day from a datetime. Dates are returned unchanged.

    Example:
        >>> to_date(datetime(2024, 1, 15, 23, 59))
        datetime.date(2024, 1, 15)
    """
    if isinstance(value, datetime):
        return value.date()
    return value

def calculate_cycle_day(profile: CycleProfile, target_date: Optional[DateLike] = None) -> Optional[int]:
    """
    Calculate the 1-based day of the cycle for a calendar date.

    The cycle repeats every profile.cycle_length days starting at the anchor
    date, so dates before the anchor resolve to the matching day of an
    earlier cycle.

    Args:
        profile: Cycle configuration
        target_date: Date to calculate for, defaults to today

    Returns:
        Cycle day in [1, cycle_length], or None if the profile has no anchor date

    Example:
        >>> profile = CycleProfile(anchor_date=date(2024, 1, 1), cycle_length=28)
        >>> calculate_cycle_day(profile, date(2024, 1, 15))
        15
        >>> calculate_cycle_day(profile, date(2023, 12, 31))
        28
    """
    if profile.anchor_date is None:
        return None
    if target_date is None:
        target_date = date.today()

    diff = (to_date(target_date) - profile.anchor_date).days
    return diff % profile.cycle_length + 1
