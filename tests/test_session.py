"""
Tests for the cycle session.
"""
import pytest
from datetime import date
from unittest.mock import Mock

from src.models.cycle import CycleProfile
from src.models.event import EventType
from src.services.exceptions import InvalidCycleConfigurationError, InvalidEventError
from src.services.session import CycleSession, parse_cycle_form, parse_event_form
from src.utils.timers import TaskScheduler

TODAY = date(2024, 1, 15)

@pytest.fixture
def session(clock):
    """Unconfigured session with mocked storage and a manual clock."""
    storage = Mock()
    return CycleSession(storage=storage, today=TODAY, scheduler=TaskScheduler(clock=clock))

def test_configure_sets_profile_and_saves(session):
    profile = session.configure("2024-01-01", "28")

    assert profile == CycleProfile(anchor_date=date(2024, 1, 1), cycle_length=28)
    assert session.profile == profile
    session.storage.save.assert_called_once_with(session.profile, session.store)

@pytest.mark.parametrize("last_period_date,cycle_length", [
    ("", "28"),
    (None, "28"),
    ("2024-01-01", ""),
    ("2024-01-01", "abc"),
    ("2024-01-01", "28.5"),
    ("2024-01-01", "20"),
    ("2024-01-01", "36"),
    ("2024-13-45", "28"),
    ("9999-12-20", "28"),
])
def test_configure_rejects_invalid_input(session, last_period_date, cycle_length):
    session.configure("2024-01-01", "30")
    session.storage.save.reset_mock()

    with pytest.raises(InvalidCycleConfigurationError):
        session.configure(last_period_date, cycle_length)

    assert session.profile == CycleProfile(anchor_date=date(2024, 1, 1), cycle_length=30)
    session.storage.save.assert_not_called()

def test_parse_cycle_form_accepts_boundaries():
    assert parse_cycle_form("2024-01-01", "21").cycle_length == 21
    assert parse_cycle_form("2024-01-01", 35).cycle_length == 35
    assert parse_cycle_form(" 2024-01-01 ", " 28 ").anchor_date == date(2024, 1, 1)

def test_parse_cycle_form_accepts_integral_float():
    assert parse_cycle_form("2024-01-01", 28.0).cycle_length == 28
    with pytest.raises(InvalidCycleConfigurationError):
        parse_cycle_form("2024-01-01", 28.5)

def test_parse_cycle_form_latest_anchor():
    profile = parse_cycle_form("9999-11-26", 35)
    assert profile.anchor_date == date(9999, 11, 26)
    with pytest.raises(InvalidCycleConfigurationError):
        parse_cycle_form("9999-11-27", 21)

def test_add_and_remove_event(session):
    session.configure("2024-01-01", "28")
    event_id = session.add_event({
        "type": "appointment",
        "date": "2024-01-20",
        "title": "Ginecóloga"
    })

    assert session.store.get(event_id).description == ""
    assert session.storage.save.call_count == 2

    assert session.remove_event(event_id) is True
    assert session.store.get(event_id) is None
    assert session.storage.save.call_count == 3

def test_remove_unknown_event_does_not_save(session):
    assert session.remove_event("missing") is False
    session.storage.save.assert_not_called()

@pytest.mark.parametrize("form", [
    {"date": "2024-01-20", "title": "X"},
    {"type": "period", "title": "X"},
    {"type": "period", "date": "2024-01-20"},
    {"type": "period", "date": "2024-01-20", "title": "  "},
    {"type": "birthday", "date": "2024-01-20", "title": "X"},
    {"type": "period", "date": "someday", "title": "X"},
    {"type": ["period"], "date": "2024-01-20", "title": "X"},
    {"type": {"kind": "period"}, "date": "2024-01-20", "title": "X"},
])
def test_parse_event_form_rejects_invalid_input(form):
    with pytest.raises(InvalidEventError):
        parse_event_form(form)

def test_parse_event_form_accepts_event_type_member():
    draft = parse_event_form({"type": EventType.PERIOD, "date": "2024-01-20", "title": "Inicio"})
    assert draft.type == EventType.PERIOD

def test_rejected_event_leaves_store_unchanged(session):
    with pytest.raises(InvalidEventError):
        session.add_event({"type": "period", "date": "2024-01-20", "title": ""})
    assert len(session.store) == 0
    session.storage.save.assert_not_called()

def test_notice_dismissed_after_delay(session, clock):
    session.configure("2024-01-01", "28")
    assert session.notice == "Ciclo guardado"

    clock.advance(1.0)
    session.scheduler.run_due()
    assert session.notice == "Ciclo guardado"

    clock.advance(0.5)
    session.scheduler.run_due()
    assert session.notice is None

def test_listeners_notified_once_per_burst(session, clock):
    listener = Mock()
    session.subscribe(listener)

    session.configure("2024-01-01", "28")
    session.add_event({"type": "period", "date": "2024-01-29", "title": "Inicio"})
    session.next_month()

    clock.advance(1)
    session.scheduler.run_due()
    listener.assert_called_once_with(session)

def test_close_cancels_pending_work(session, clock):
    listener = Mock()
    session.subscribe(listener)
    session.configure("2024-01-01", "28")
    session.close()

    clock.advance(5)
    assert session.scheduler.run_due() == 0
    listener.assert_not_called()
    assert session.notice == "Ciclo guardado"

def test_month_navigation(session):
    assert (session.year, session.month) == (2024, 1)
    session.previous_month()
    assert (session.year, session.month) == (2023, 12)
    session.next_month()
    session.next_month()
    assert (session.year, session.month) == (2024, 2)
    with pytest.raises(ValueError):
        session.show_month(2024, 0)

@pytest.mark.parametrize("year", [0, 1, 9999, 10000])
def test_show_month_rejects_edge_years(session, year):
    with pytest.raises(ValueError):
        session.show_month(year, 6)
    assert (session.year, session.month) == (2024, 1)

def test_next_month_stops_before_last_year(session):
    session.show_month(9998, 12)
    with pytest.raises(ValueError):
        session.next_month()
    assert (session.year, session.month) == (9998, 12)

def test_snapshot_unconfigured(session):
    snapshot = session.snapshot()

    assert snapshot["phase"] == {
        "configured": False,
        "message": "Configura tu ciclo para ver información"
    }
    assert snapshot["next_period"] is None
    assert snapshot["upcoming_events"] == []
    assert snapshot["upcoming_message"] == "Sin registros próximos"
    assert snapshot["calendar"]["title"] == "Enero 2024"
    assert len(snapshot["calendar"]["weeks"]) == 5

def test_snapshot_configured(session):
    session.configure("2024-01-01", "28")
    session.add_event({"type": "period", "date": "2024-01-29", "title": "Inicio"})
    session.add_event({"type": "medication", "date": "2024-01-02", "title": "Pasada"})

    snapshot = session.snapshot()

    assert snapshot["profile"] == {"anchor_date": "2024-01-01", "cycle_length": 28}
    assert snapshot["phase"]["key"] == "ovulation"
    assert snapshot["phase"]["name"] == "FASE DE OVULACIÓN"
    assert snapshot["phase"]["label"] == "Día 15 de 28"
    assert snapshot["next_period"]["date"] == "2024-01-29"
    assert snapshot["next_period"]["date_label"] == "29 ENE"
    assert snapshot["next_period"]["text"] == "Esperado en 14 días"
    assert [e["title"] for e in snapshot["upcoming_events"]] == ["Inicio"]
    assert snapshot["upcoming_message"] is None

    cells = [cell for week in snapshot["calendar"]["weeks"] for cell in week]
    jan_29 = next(c for c in cells if c["date"] == "2024-01-29")
    assert jan_29["event_dot"] == "#8B1538"
    assert jan_29["phase"] == "menstrual"

def test_snapshot_unclassified_day(clock):
    session = CycleSession(
        profile=CycleProfile(anchor_date=date(2024, 1, 1), cycle_length=35),
        today=date(2024, 1, 31),
        scheduler=TaskScheduler(clock=clock)
    )
    snapshot = session.snapshot()

    assert snapshot["phase"]["configured"] is True
    assert "key" not in snapshot["phase"]
    assert snapshot["next_period"]["progress_label"] == "Día 31 de 35"

def test_load_from_storage(profile, event_store):
    storage = Mock()
    storage.load.return_value = (profile, event_store)

    session = CycleSession.load(storage, today=TODAY)
    assert session.profile is profile
    assert session.store is event_store
    assert session.storage is storage
