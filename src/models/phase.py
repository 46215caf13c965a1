"""
Phase model definitions for menstrual cycle phases.
"""
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict


class PhaseType(str, Enum):
    """
    Menstrual cycle phases shown on the calendar.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATION = "ovulation"
    LUTEAL = "luteal"


class ColorPair(BaseModel):
    """Dark/light colour pair used for a phase badge gradient."""
    model_config = ConfigDict(frozen=True)

    dark: str
    light: str


class PhaseDefinition(BaseModel):
    """
    Static definition of a phase.

    day_range holds 0-based inclusive cycle-day offsets. sub_stages lists the
    CSS classes used for the successive days of the phase; days past the end
    of the list reuse the last entry.
    """
    model_config = ConfigDict(frozen=True)

    key: PhaseType
    name: str
    day_range: Tuple[int, int]
    tip: str
    colors: ColorPair
    sub_stages: Tuple[str, ...]

    @property
    def start(self) -> int:
        return self.day_range[0]

    @property
    def end(self) -> int:
        return self.day_range[1]

    def contains(self, offset: int) -> bool:
        """Check if a 0-based cycle-day offset falls inside this phase."""
        return self.start <= offset <= self.end


class PhaseMatch(BaseModel):
    """
    Result of classifying a cycle day.
    """
    model_config = ConfigDict(frozen=True)

    phase: PhaseDefinition
    cycle_day: int  # 1-based
    offset: int  # 0-based
    sub_stage: str

    @property
    def key(self) -> PhaseType:
        return self.phase.key

    @property
    def day_in_phase(self) -> int:
        """1-based position of the day inside its phase."""
        return self.offset - self.phase.start + 1
