"""
Pytest configuration and shared fixtures.
"""
import pytest
from dataclasses import dataclass
from datetime import date
from typing import List
from unittest.mock import Mock

from src.models.cycle import CycleProfile
from src.models.event import CalendarEvent, EventType
from src.services.events import EventStore

class FakeClock:
    """Manually advanced clock for scheduler tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

@dataclass
class FakeLambdaContext:
    function_name: str = "nua-calendar-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:nua-calendar-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"
    function_version: str = "$LATEST"

@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Minimal Lambda context accepted by Powertools."""
    return FakeLambdaContext()

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def profile() -> CycleProfile:
    """A configured 28-day cycle starting 2024-01-01."""
    return CycleProfile(anchor_date=date(2024, 1, 1), cycle_length=28)

@pytest.fixture
def long_profile() -> CycleProfile:
    """A configured 35-day cycle starting 2024-01-01."""
    return CycleProfile(anchor_date=date(2024, 1, 1), cycle_length=35)

@pytest.fixture
def sample_events() -> List[CalendarEvent]:
    """Events spread around mid January 2024."""
    return [
        CalendarEvent(id="1", type=EventType.APPOINTMENT, date=date(2024, 1, 20), title="Ginecóloga"),
        CalendarEvent(id="2", type=EventType.PERIOD, date=date(2024, 1, 29), title="Inicio"),
        CalendarEvent(id="3", type=EventType.MEDICATION, date=date(2024, 1, 10), title="Hierro"),
        CalendarEvent(
            id="4",
            type=EventType.MEDICATION,
            date=date(2024, 1, 20),
            title="Magnesio",
            description="Después de cenar"
        )
    ]

@pytest.fixture
def event_store(sample_events) -> EventStore:
    return EventStore(sample_events)

@pytest.fixture
def mock_dynamo() -> Mock:
    """DynamoDB client mock with no stored item."""
    dynamo = Mock()
    dynamo.get_item.return_value = None
    return dynamo
