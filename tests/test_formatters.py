"""
Tests for display formatting.
"""
from datetime import date

from src.models.prediction import Countdown, CountdownStatus
from src.services.phase import classify_cycle_day
from src.utils.formatters import (
    format_countdown,
    format_cycle_day,
    format_month_title,
    format_phase_badge,
    format_short_date
)

def test_format_countdown():
    assert format_countdown(Countdown(status=CountdownStatus.OVERDUE, days=3)) == \
        "Debería haber comenzado hace 3 días"
    assert format_countdown(Countdown(status=CountdownStatus.TOMORROW, days=1)) == "Esperado mañana"
    assert format_countdown(Countdown(status=CountdownStatus.IN_DAYS, days=14)) == "Esperado en 14 días"

def test_format_dates():
    assert format_short_date(date(2024, 1, 29)) == "29 ENE"
    assert format_month_title(2024, 12) == "Diciembre 2024"

def test_format_cycle_day():
    assert format_cycle_day(15, 28) == "Día 15 de 28"
    assert format_cycle_day(None, None) == "Día - de -"

def test_format_phase_badge():
    assert format_phase_badge(classify_cycle_day(1)) == "linear-gradient(135deg, #8B1538, #F4C2D8)"
