"""
Event store service.

Keeps the user's calendar events in insertion order and answers date and
"upcoming" queries for the calendar and the events list.

Typical usage:
    store = EventStore()
    event_id = store.add(EventDraft(type="period", date=date(2024, 2, 1), title="Inicio"))
    store.on_date(date(2024, 2, 1))
    store.remove(event_id)
"""
import time
from typing import Callable, Iterable, Iterator, List, Optional
from datetime import date

from aws_lambda_powertools import Logger

from src.models.event import CalendarEvent, EventDraft
from src.services.constants import UPCOMING_EVENTS_LIMIT
from src.services.utils import DateLike, to_date

logger = Logger()

class EventStore:
    """Ordered collection of calendar events."""

    def __init__(
        self,
        events: Optional[Iterable[CalendarEvent]] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize the store.

        Args:
            events: Previously stored events, kept in the given order
            clock: Source of the current time in seconds, used for ids
        """
        self._events: List[CalendarEvent] = []
        self._clock = clock
        self._last_id = 0
        for event in events or []:
            self._append(event)

    def _append(self, event: CalendarEvent) -> None:
        if self.get(event.id) is not None:
            raise ValueError(f"Duplicate event id: {event.id}")
        self._events.append(event)
        if event.id.isdigit():
            self._last_id = max(self._last_id, int(event.id))

    def _next_id(self) -> str:
        """
        Generate a time-based id (milliseconds since epoch).

        If the clock has not moved past the last issued id the next integer
        is used instead, so ids never repeat within the store.
        """
        candidate = max(int(self._clock() * 1000), self._last_id + 1)
        while self.get(str(candidate)) is not None:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    def add(self, draft: EventDraft) -> str:
        """
        Store a new event.

        Args:
            draft: Event form data

        Returns:
            The id assigned to the event
        """
        event = CalendarEvent(id=self._next_id(), **draft.model_dump(exclude={"id"}))
        self._events.append(event)
        logger.debug("Event added", extra={
            "event_id": event.id,
            "event_type": event.type.value,
            "date": event.date.isoformat()
        })
        return event.id

    def remove(self, event_id: str) -> bool:
        """
        Delete an event by id. Unknown ids are ignored.

        Returns:
            True if an event was removed
        """
        remaining = [e for e in self._events if e.id != event_id]
        removed = len(remaining) != len(self._events)
        self._events = remaining
        if not removed:
            logger.debug("Event to remove not found", extra={"event_id": event_id})
        return removed

    def get(self, event_id: str) -> Optional[CalendarEvent]:
        """Get an event by id."""
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def on_date(self, target_date: DateLike) -> List[CalendarEvent]:
        """
        Get the events on a calendar day, in insertion order.

        Args:
            target_date: Day to look up; a datetime is compared by its date
        """
        day = to_date(target_date)
        return [e for e in self._events if e.date == day]

    def upcoming(self, today: Optional[DateLike] = None, limit: int = UPCOMING_EVENTS_LIMIT) -> List[CalendarEvent]:
        """
        Get events dated today or later.

        Args:
            today: Reference date, defaults to today
            limit: Maximum number of events returned

        Returns:
            Up to `limit` events sorted by ascending date (insertion order for ties)
        """
        if limit <= 0:
            return []
        if today is None:
            today = date.today()

        day = to_date(today)
        future = sorted((e for e in self._events if e.date >= day), key=lambda e: e.date)
        return future[:limit]

    def to_list(self) -> List[CalendarEvent]:
        return list(self._events)

    def __iter__(self) -> Iterator[CalendarEvent]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)
