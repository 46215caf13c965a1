"""
Cycle session service.

A CycleSession owns one user's cycle profile and event store for the
duration of a request. It validates form input, applies mutations, persists
them and builds the data the calendar page shows.

Typical usage:
    session = CycleSession.load(CycleStorage(user_id))
    session.configure("2024-01-01", "28")
    event_id = session.add_event({"type": "period", "date": "2024-02-01", "title": "Inicio"})
    data = session.snapshot()
"""
from datetime import MAXYEAR, MINYEAR, date
from typing import Any, Callable, Dict, List, Mapping, Optional

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from src.models.cycle import CycleProfile
from src.models.event import EventDraft, EventType
from src.services.calendar import build_month_grid, shift_month
from src.services.constants import (
    CHANGE_DEBOUNCE_SECONDS,
    MIN_CYCLE_LENGTH,
    MAX_CYCLE_LENGTH,
    NOTICE_DISMISS_SECONDS,
    UPCOMING_EVENTS_LIMIT
)
from src.services.cycle import estimate_next_period
from src.services.events import EventStore
from src.services.exceptions import InvalidCycleConfigurationError, InvalidEventError
from src.services.phase import classify_cycle_day
from src.services.storage import CycleStorage
from src.services.utils import DateLike, calculate_cycle_day, to_date
from src.utils.formatters import (
    NO_EVENTS_MESSAGE,
    NO_PHASE_MESSAGE,
    format_countdown,
    format_cycle_day,
    format_month_title,
    format_phase_badge,
    format_short_date
)
from src.utils.timers import Debouncer, TaskScheduler

logger = Logger()

def parse_cycle_form(last_period_date: Any, cycle_length: Any) -> CycleProfile:
    """
    Validate the cycle configuration form.

    Args:
        last_period_date: Date string in YYYY-MM-DD format (or a date)
        cycle_length: Integer, integral float or integer string between 21 and 35

    Returns:
        New CycleProfile

    Raises:
        InvalidCycleConfigurationError: If the date is missing or invalid or
            the length does not parse or is out of range
    """
    if isinstance(last_period_date, str):
        last_period_date = last_period_date.strip()
    if not last_period_date:
        raise InvalidCycleConfigurationError("Last period date is required")

    try:
        if isinstance(cycle_length, float) and cycle_length.is_integer():
            length = int(cycle_length)
        else:
            length = int(str(cycle_length).strip())
    except (TypeError, ValueError):
        raise InvalidCycleConfigurationError(f"Cycle length must be an integer, got {cycle_length!r}")

    if not MIN_CYCLE_LENGTH <= length <= MAX_CYCLE_LENGTH:
        raise InvalidCycleConfigurationError(
            f"Cycle length must be between {MIN_CYCLE_LENGTH} and {MAX_CYCLE_LENGTH} days"
        )

    try:
        return CycleProfile(anchor_date=last_period_date, cycle_length=length)
    except ValidationError:
        raise InvalidCycleConfigurationError(f"Invalid last period date: {last_period_date!r}")

def parse_event_form(form: Mapping[str, Any]) -> EventDraft:
    """
    Validate the event form.

    Raises:
        InvalidEventError: If type, date or title is missing, or the type is unknown
    """
    for field in ("type", "date", "title"):
        value = form.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InvalidEventError(f"Event {field} is required")

    try:
        EventType(form["type"])
    except (TypeError, ValueError):
        raise InvalidEventError(f"Unknown event type: {form['type']!r}")

    try:
        return EventDraft(
            type=form["type"],
            date=form["date"],
            title=form["title"],
            description=form.get("description") or ""
        )
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise InvalidEventError(f"Invalid event fields: {', '.join(fields)}")

class CycleSession:
    """State of one user's cycle calendar."""

    def __init__(
        self,
        profile: Optional[CycleProfile] = None,
        store: Optional[EventStore] = None,
        storage: Optional[CycleStorage] = None,
        today: Optional[DateLike] = None,
        scheduler: Optional[TaskScheduler] = None
    ):
        """
        Initialize a session.

        Args:
            profile: Cycle configuration, unconfigured by default
            store: Events, empty by default
            storage: Where mutations are saved; nothing is saved when omitted
            today: Reference date, defaults to today
            scheduler: Scheduler for notices and change notifications
        """
        self.profile = profile or CycleProfile()
        self.store = store if store is not None else EventStore()
        self.storage = storage
        self.today = to_date(today) if today is not None else date.today()
        self.year = self.today.year
        self.month = self.today.month
        self.notice: Optional[str] = None
        self.scheduler = scheduler or TaskScheduler()
        self._listeners: List[Callable[["CycleSession"], Any]] = []
        self._notifier = Debouncer(self.scheduler, CHANGE_DEBOUNCE_SECONDS, self._notify_listeners)

    @classmethod
    def load(cls, storage: CycleStorage, **kwargs: Any) -> "CycleSession":
        """Create a session from stored cycle data."""
        profile, store = storage.load()
        return cls(profile=profile, store=store, storage=storage, **kwargs)

    def subscribe(self, listener: Callable[["CycleSession"], Any]) -> None:
        """Register a callback run after a burst of state changes."""
        self._listeners.append(listener)

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _dismiss_notice(self) -> None:
        self.notice = None

    def _commit(self, notice: Optional[str] = None) -> None:
        if self.storage is not None:
            self.storage.save(self.profile, self.store)
        if notice:
            self.notice = notice
            self.scheduler.call_later(NOTICE_DISMISS_SECONDS, self._dismiss_notice)
        self._notifier.trigger()

    def configure(self, last_period_date: Any, cycle_length: Any) -> CycleProfile:
        """
        Replace the cycle profile from form input.

        Raises:
            InvalidCycleConfigurationError: If the input is rejected; the
                current profile is left unchanged
        """
        profile = parse_cycle_form(last_period_date, cycle_length)
        self.profile = profile
        logger.info("Cycle configured", extra={
            "anchor_date": profile.anchor_date.isoformat(),
            "cycle_length": profile.cycle_length
        })
        self._commit("Ciclo guardado")
        return profile

    def add_event(self, form: Mapping[str, Any]) -> str:
        """
        Add an event from form input.

        Returns:
            The new event id

        Raises:
            InvalidEventError: If the input is rejected
        """
        event_id = self.store.add(parse_event_form(form))
        self._commit("Registro guardado")
        return event_id

    def remove_event(self, event_id: str) -> bool:
        """Delete an event. Unknown ids are a no-op and nothing is saved."""
        removed = self.store.remove(event_id)
        if removed:
            self._commit()
        return removed

    def show_month(self, year: int, month: int) -> None:
        """Display a specific month."""
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month: {month}")
        # Padding cells reach into the neighbouring years
        if not MINYEAR < year < MAXYEAR:
            raise ValueError(f"Year must be between {MINYEAR + 1} and {MAXYEAR - 1}: {year}")
        self.year, self.month = year, month
        self._notifier.trigger()

    def next_month(self) -> None:
        self.show_month(*shift_month(self.year, self.month, 1))

    def previous_month(self) -> None:
        self.show_month(*shift_month(self.year, self.month, -1))

    def close(self) -> None:
        """Cancel pending notices and notifications."""
        self._notifier.cancel()
        self.scheduler.cancel_all()

    def phase_card(self) -> Dict[str, Any]:
        """Current phase data, or a placeholder when there is no phase."""
        cycle_day = calculate_cycle_day(self.profile, self.today)
        match = classify_cycle_day(cycle_day)
        if match is None:
            return {"configured": self.profile.is_configured, "message": NO_PHASE_MESSAGE}
        return {
            "configured": True,
            "key": match.key.value,
            "name": match.phase.name.upper(),
            "tip": match.phase.tip,
            "badge": format_phase_badge(match),
            "sub_stage": match.sub_stage,
            "cycle_day": cycle_day,
            "label": format_cycle_day(cycle_day, self.profile.cycle_length)
        }

    def next_period_card(self) -> Optional[Dict[str, Any]]:
        """Next period date, countdown text and cycle progress."""
        estimate = estimate_next_period(self.profile, self.today)
        if estimate is None:
            return None
        return {
            "date": estimate.next_date.isoformat(),
            "date_label": format_short_date(estimate.next_date),
            "days_until": estimate.days_until,
            "status": estimate.countdown.status.value,
            "text": format_countdown(estimate.countdown),
            "progress_percent": estimate.progress_percent,
            "progress_label": format_cycle_day(estimate.cycle_day, self.profile.cycle_length)
        }

    def calendar(self) -> Dict[str, Any]:
        """Grid of the displayed month."""
        grid = build_month_grid(self.year, self.month, self.profile, self.store, self.today)
        return {
            "year": grid.year,
            "month": grid.month,
            "title": format_month_title(grid.year, grid.month),
            "weeks": [
                [cell.model_dump(mode="json") for cell in week]
                for week in grid.weeks
            ]
        }

    def upcoming_events(self, limit: int = UPCOMING_EVENTS_LIMIT) -> List[Dict[str, Any]]:
        return [
            {**event.model_dump(mode="json"), "date_label": format_short_date(event.date)}
            for event in self.store.upcoming(self.today, limit)
        ]

    def snapshot(self) -> Dict[str, Any]:
        """
        Everything the calendar page shows, as JSON-ready data.
        """
        upcoming = self.upcoming_events()
        return {
            "profile": self.profile.model_dump(mode="json"),
            "notice": self.notice,
            "phase": self.phase_card(),
            "next_period": self.next_period_card(),
            "calendar": self.calendar(),
            "upcoming_events": upcoming,
            "upcoming_message": None if upcoming else NO_EVENTS_MESSAGE
        }
