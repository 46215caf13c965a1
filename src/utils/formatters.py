"""
Display formatting for cycle data.
"""
from datetime import date
from typing import Optional

from src.models.phase import PhaseMatch
from src.models.prediction import Countdown, CountdownStatus
from src.services.constants import MONTH_ABBREVIATIONS, MONTH_NAMES

NO_PHASE_MESSAGE = "Configura tu ciclo para ver información"
NO_EVENTS_MESSAGE = "Sin registros próximos"

def format_countdown(countdown: Countdown) -> str:
    """Format the countdown to the next period."""
    if countdown.status == CountdownStatus.OVERDUE:
        return f"Debería haber comenzado hace {countdown.days} días"
    if countdown.status == CountdownStatus.TOMORROW:
        return "Esperado mañana"
    return f"Esperado en {countdown.days} días"

def format_short_date(value: date) -> str:
    """Format a date as day and month abbreviation, e.g. '29 ENE'."""
    return f"{value.day} {MONTH_ABBREVIATIONS[value.month - 1]}"

def format_month_title(year: int, month: int) -> str:
    """Format the calendar header, e.g. 'Enero 2024'."""
    return f"{MONTH_NAMES[month - 1]} {year}"

def format_cycle_day(cycle_day: Optional[int], cycle_length: Optional[int]) -> str:
    """Format the progress label, e.g. 'Día 15 de 28'."""
    if cycle_day is None or cycle_length is None:
        return "Día - de -"
    return f"Día {cycle_day} de {cycle_length}"

def format_phase_badge(match: PhaseMatch) -> str:
    """CSS background for the phase badge."""
    colors = match.phase.colors
    return f"linear-gradient(135deg, {colors.dark}, {colors.light})"
