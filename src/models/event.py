"""
Event model definitions for user-entered calendar events.
"""
from datetime import date, datetime
from enum import Enum
from typing import Any
from pydantic import BaseModel, Field, field_validator


class EventType(str, Enum):
    """
    Kinds of events a user can log on the calendar.
    """
    PERIOD = "period"
    APPOINTMENT = "appointment"
    MEDICATION = "medication"


class EventDraft(BaseModel):
    """
    Event data as submitted from the event form, before an id is assigned.
    """
    type: EventType
    date: date
    title: str = Field(..., min_length=1)
    description: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_datetime(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, value: Any) -> Any:
        return value or ""


class CalendarEvent(EventDraft):
    """
    Represents a stored calendar event. Events are never mutated; identity is the id.
    """
    id: str = Field(..., min_length=1)
