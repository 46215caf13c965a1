"""
Service module for next period predictions.

This module projects the next expected period from the configured anchor
date and cycle length, classifies the remaining time into a countdown and
measures progress through the current cycle.

Typical usage:
    profile = session.profile
    estimate = estimate_next_period(profile)
    if estimate:
        print(estimate.next_date, estimate.countdown.status)
"""
import math
from typing import Optional
from datetime import date, timedelta

from aws_lambda_powertools import Logger

from src.models.cycle import CycleProfile
from src.models.prediction import Countdown, CountdownStatus, NextPeriodEstimate
from src.services.utils import DateLike, calculate_cycle_day, to_date

logger = Logger()

def calculate_next_period(profile: CycleProfile) -> Optional[date]:
    """
    Calculate the next expected period start.

    Args:
        profile: Cycle configuration

    Returns:
        anchor_date + cycle_length days, or None if the profile is unconfigured

    Example:
        >>> profile = CycleProfile(anchor_date=date(2024, 1, 1), cycle_length=28)
        >>> calculate_next_period(profile)
        datetime.date(2024, 1, 29)
    """
    if profile.anchor_date is None:
        return None
    return profile.anchor_date + timedelta(days=profile.cycle_length)

def describe_countdown(next_date: DateLike, today: Optional[DateLike] = None) -> Countdown:
    """
    Classify the time left until the next period.

    Args:
        next_date: Expected start of the next period
        today: Reference date, defaults to today

    Returns:
        OVERDUE with the days elapsed when the date is today or past,
        TOMORROW when it is one day away, IN_DAYS otherwise
    """
    if today is None:
        today = date.today()

    days_until = math.ceil((to_date(next_date) - to_date(today)) / timedelta(days=1))
    if days_until <= 0:
        return Countdown(status=CountdownStatus.OVERDUE, days=abs(days_until))
    if days_until == 1:
        return Countdown(status=CountdownStatus.TOMORROW, days=1)
    return Countdown(status=CountdownStatus.IN_DAYS, days=days_until)

def calculate_cycle_progress(profile: CycleProfile, today: Optional[DateLike] = None) -> Optional[float]:
    """
    Percentage of the current cycle already elapsed, in [0, 100].

    Returns:
        Progress percentage, or None if the profile is unconfigured
    """
    cycle_day = calculate_cycle_day(profile, today)
    if cycle_day is None:
        return None
    percent = cycle_day / profile.cycle_length * 100
    return max(0.0, min(100.0, percent))

def estimate_next_period(profile: CycleProfile, today: Optional[DateLike] = None) -> Optional[NextPeriodEstimate]:
    """
    Build the full next period estimate for display.

    Args:
        profile: Cycle configuration
        today: Reference date, defaults to today

    Returns:
        NextPeriodEstimate, or None if the profile is unconfigured
    """
    if today is None:
        today = date.today()

    next_date = calculate_next_period(profile)
    if next_date is None:
        return None

    countdown = describe_countdown(next_date, today)
    days_until = (next_date - to_date(today)).days
    if countdown.status == CountdownStatus.OVERDUE:
        logger.debug("Expected period start has passed", extra={
            "next_date": next_date.isoformat(),
            "days_overdue": countdown.days
        })

    return NextPeriodEstimate(
        next_date=next_date,
        days_until=days_until,
        countdown=countdown,
        cycle_day=calculate_cycle_day(profile, today),
        progress_percent=calculate_cycle_progress(profile, today)
    )
