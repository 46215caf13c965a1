"""
Constants and shared data for cycle-related services.
"""
from typing import Dict, Tuple

from src.models.phase import ColorPair, PhaseDefinition, PhaseType

MIN_CYCLE_LENGTH = 21
MAX_CYCLE_LENGTH = 35
DEFAULT_CYCLE_LENGTH = 28

UPCOMING_EVENTS_LIMIT = 5

# Seconds before a confirmation notice is dismissed
NOTICE_DISMISS_SECONDS = 1.5
# Seconds used to coalesce bursts of state changes
CHANGE_DEBOUNCE_SECONDS = 0.12

# Checked in order, first match wins. Ranges are 0-based cycle-day offsets
# and do not scale with cycle length.
PHASES: Tuple[PhaseDefinition, ...] = (
    PhaseDefinition(
        key=PhaseType.MENSTRUAL,
        name="Fase Menstruación",
        day_range=(0, 4),
        tip=(
            "Estamos sangrando. El cansancio es real, no mental. Dale a tu cuerpo "
            "hierro (espinacas, lentejas, carne) y agua. Y descansa. No te "
            "disculpes por necesitarlo."
        ),
        colors=ColorPair(dark="#8B1538", light="#F4C2D8"),
        sub_stages=(
            "day-menstrual-1",
            "day-menstrual-2",
            "day-menstrual-3",
            "day-menstrual-4",
            "day-menstrual-5"
        )
    ),
    PhaseDefinition(
        key=PhaseType.FOLLICULAR,
        name="Fase Folicular",
        day_range=(5, 13),
        tip=(
            "Tu energía vuelve y es hermoso. Aprovéchala: cardio, baile, cualquier "
            "cosa que te haga sentir fuerte. La proteína es tu aliada: huevo, "
            "pescado, legumbres."
        ),
        colors=ColorPair(dark="#0D5C3D", light="#B8E5D2"),
        sub_stages=(
            "day-follicular-early",
            "day-follicular-mid",
            "day-follicular-late"
        )
    ),
    PhaseDefinition(
        key=PhaseType.OVULATION,
        name="Fase de Ovulación",
        day_range=(14, 16),
        tip=(
            "Te sientes magnética y no lo imaginas: estás ovulando. Tu comunicación "
            "está en su punto más claro. Di lo que necesitas decir. Muévete: yoga "
            "flow, danza, aeróbico. Este es tu pico."
        ),
        colors=ColorPair(dark="#C42063", light="#FFDEE9"),
        sub_stages=(
            "day-ovulation-fertile",
            "day-ovulation-peak"
        )
    ),
    PhaseDefinition(
        key=PhaseType.LUTEAL,
        name="Fase Lútea",
        day_range=(17, 28),
        tip=(
            "Te sientes rara y tiene nombre: fase lútea. La progesterona baja y todo "
            "se siente más pesado. No lo aguantes. Di \"no\" sin culpa. El magnesio "
            "te calma: chocolate, almendras, espinacas. Comida caliente también ayuda."
        ),
        colors=ColorPair(dark="#6B4D7C", light="#E8D9F0"),
        sub_stages=(
            "day-luteal-early",
            "day-luteal-mid",
            "day-luteal-late"
        )
    )
)

EVENT_COLORS: Dict[str, str] = {
    "period": "#8B1538",
    "appointment": "#3D8DE9",
    "medication": "#FFD200"
}

# Accent used for event types without a mapped colour
DEFAULT_EVENT_COLOR = "#C42063"

MONTH_NAMES = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre"
)

MONTH_ABBREVIATIONS = (
    "ENE", "FEB", "MAR", "ABR", "MAY", "JUN",
    "JUL", "AGO", "SEP", "OCT", "NOV", "DIC"
)
