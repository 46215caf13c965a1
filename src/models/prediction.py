"""
Model definitions for next period predictions.
"""
from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class CountdownStatus(str, Enum):
    """
    Classification of the time left until the next expected period.
    """
    OVERDUE = "overdue"
    TOMORROW = "tomorrow"
    IN_DAYS = "in_days"


class Countdown(BaseModel):
    """
    Countdown to the next period. days is always non-negative; for OVERDUE it
    is the number of days since the expected start.
    """
    status: CountdownStatus
    days: int = Field(..., ge=0)


class NextPeriodEstimate(BaseModel):
    """
    Next period prediction with countdown and progress through the current cycle.
    """
    next_date: date
    days_until: int
    countdown: Countdown
    cycle_day: Optional[int] = None
    progress_percent: Optional[float] = None
