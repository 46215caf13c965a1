"""
Cycle profile model: the anchor date and cycle length configured by the user.
"""
from datetime import date, datetime, timedelta
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from src.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    MIN_CYCLE_LENGTH,
    MAX_CYCLE_LENGTH
)

# Latest anchor whose next period date still fits in the calendar
LATEST_ANCHOR_DATE = date.max - timedelta(days=MAX_CYCLE_LENGTH)


def parse_anchor(value: Any) -> Any:
    """
    Normalize an anchor date value to a date.

    Accepts date, datetime and ISO-8601 date or date-time strings (a trailing
    'Z' is accepted). Anything else is returned untouched so pydantic can
    reject it.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if "T" in text or " " in text:
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    return value


class CycleProfile(BaseModel):
    """
    Represents the user's cycle configuration.

    anchor_date is the first day of the most recent period. None means the
    profile has not been configured yet.
    """
    anchor_date: Optional[date] = None
    cycle_length: int = Field(DEFAULT_CYCLE_LENGTH, ge=MIN_CYCLE_LENGTH, le=MAX_CYCLE_LENGTH)

    @field_validator("anchor_date", mode="before")
    @classmethod
    def _normalize_anchor(cls, value: Any) -> Any:
        if value is None:
            return None
        return parse_anchor(value)

    @field_validator("anchor_date")
    @classmethod
    def _check_anchor_range(cls, value: Optional[date]) -> Optional[date]:
        if value is not None and value > LATEST_ANCHOR_DATE:
            raise ValueError(f"Anchor date must not be after {LATEST_ANCHOR_DATE.isoformat()}")
        return value

    @property
    def is_configured(self) -> bool:
        """Check if an anchor date has been set."""
        return self.anchor_date is not None
