"""
Cycle data persistence service.

This module stores a user's cycle profile and events as a single JSON blob
in DynamoDB and restores them on the next request.

Typical usage:
    storage = CycleStorage(user_id)
    profile, store = storage.load()
    ...
    storage.save(profile, store)
"""
import json
from datetime import datetime, time
from typing import Any, Dict, Iterable, Optional, Tuple

from aws_lambda_powertools import Logger

from src.models.cycle import CycleProfile
from src.models.event import CalendarEvent
from src.services.constants import DEFAULT_CYCLE_LENGTH
from src.services.events import EventStore
from src.services.exceptions import PersistenceCorruptionError
from src.utils.dynamo import get_dynamo, create_cycle_data_key

logger = Logger()

# Anchor key written by the browser version of the calendar
LEGACY_ANCHOR_KEY = "lastPeriodStart"

def serialize_state(profile: CycleProfile, events: Iterable[CalendarEvent]) -> str:
    """
    Encode the profile and events as a JSON blob.

    The anchor date is written as an ISO-8601 date-time at midnight and event
    dates as YYYY-MM-DD.
    """
    anchor = None
    if profile.anchor_date is not None:
        anchor = datetime.combine(profile.anchor_date, time()).isoformat()

    return json.dumps({
        "anchorDate": anchor,
        "cycleLength": profile.cycle_length,
        "events": [
            {
                "id": event.id,
                "type": event.type.value,
                "date": event.date.isoformat(),
                "title": event.title,
                "description": event.description
            }
            for event in events
        ]
    }, ensure_ascii=False)

def deserialize_state(blob: Any) -> Tuple[CycleProfile, EventStore]:
    """
    Decode a JSON blob written by serialize_state.

    A missing cycle length falls back to the default and missing events to an
    empty list. Blobs saved by the browser calendar, which stored the anchor
    under "lastPeriodStart", are accepted too.

    Raises:
        PersistenceCorruptionError: If the blob is not valid JSON or holds
            invalid values
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise PersistenceCorruptionError(f"Cycle data is not valid JSON: {str(e)}")

    if not isinstance(data, dict):
        raise PersistenceCorruptionError("Cycle data must be a JSON object")

    events = data.get("events") or []
    if not isinstance(events, list):
        raise PersistenceCorruptionError("Cycle data events must be a list")

    try:
        profile = CycleProfile(
            anchor_date=data.get("anchorDate", data.get(LEGACY_ANCHOR_KEY)),
            cycle_length=data.get("cycleLength") or DEFAULT_CYCLE_LENGTH
        )
        store = EventStore(CalendarEvent(**event) for event in events)
    except (TypeError, ValueError) as e:
        raise PersistenceCorruptionError(f"Cycle data holds invalid values: {str(e)}")

    return profile, store

class CycleStorage:
    """Load and save a user's cycle data."""

    def __init__(self, user_id: str, dynamo_client=None):
        """
        Initialize storage for a user.

        Args:
            user_id: Owner of the cycle data
            dynamo_client: Optional DynamoDB client. Defaults to the shared client.
        """
        self.user_id = user_id
        self._dynamo = dynamo_client

    @property
    def dynamo(self):
        """Get the shared DynamoDB client lazily."""
        if self._dynamo is None:
            self._dynamo = get_dynamo()
        return self._dynamo

    def save(self, profile: CycleProfile, events: Iterable[CalendarEvent]) -> None:
        """
        Persist the profile and events, replacing what was stored.

        Args:
            profile: Cycle configuration
            events: Events to store (an EventStore or any iterable of events)
        """
        payload = serialize_state(profile, events)
        item: Dict[str, Any] = {
            **create_cycle_data_key(self.user_id),
            "payload": payload,
            "updated_at": datetime.now().isoformat()
        }
        self.dynamo.put_item(item)
        logger.info("Saved cycle data", extra={
            "user_id": self.user_id,
            "configured": profile.is_configured
        })

    def load(self) -> Tuple[CycleProfile, EventStore]:
        """
        Restore the profile and events.

        Missing or corrupt data never raises: an unconfigured profile and an
        empty event store are returned and the condition is logged.

        Returns:
            Tuple of (profile, event store)
        """
        item: Optional[Dict[str, Any]] = self.dynamo.get_item(create_cycle_data_key(self.user_id))
        if not item:
            logger.info("No stored cycle data", extra={"user_id": self.user_id})
            return CycleProfile(), EventStore()

        try:
            profile, store = deserialize_state(item.get("payload"))
        except PersistenceCorruptionError as e:
            logger.warning("Stored cycle data is corrupt, using defaults", extra={
                "user_id": self.user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            return CycleProfile(), EventStore()

        logger.info("Loaded cycle data", extra={
            "user_id": self.user_id,
            "configured": profile.is_configured,
            "events": len(store)
        })
        return profile, store
