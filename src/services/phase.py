"""
Service module for classifying cycle days into phases.

Typical usage:
    >>> match = get_current_phase(profile)
    >>> if match:
    ...     print(match.phase.name, match.sub_stage)
"""
from typing import Optional
from datetime import date

from src.models.cycle import CycleProfile
from src.models.phase import PhaseDefinition, PhaseMatch, PhaseType
from src.services.constants import PHASES
from src.services.utils import DateLike, calculate_cycle_day

def classify_cycle_day(cycle_day: Optional[int]) -> Optional[PhaseMatch]:
    """
    Map a 1-based cycle day to its phase and sub-stage.

    Phase ranges are 0-based offsets, so day N is looked up as offset N - 1.
    Phases are checked in table order and the first containing range wins.

    Args:
        cycle_day: Day in the cycle (1-based)

    Returns:
        PhaseMatch, or None when the day falls outside every range
        (cycles longer than 29 days leave their last days unclassified)

    Example:
        >>> classify_cycle_day(15).phase.key
        <PhaseType.OVULATION: 'ovulation'>
        >>> classify_cycle_day(30) is None
        True
    """
    if cycle_day is None:
        return None

    offset = cycle_day - 1
    for phase in PHASES:
        if phase.contains(offset):
            index = min(offset - phase.start, len(phase.sub_stages) - 1)
            return PhaseMatch(
                phase=phase,
                cycle_day=cycle_day,
                offset=offset,
                sub_stage=phase.sub_stages[index]
            )
    return None

def get_current_phase(profile: CycleProfile, target_date: Optional[DateLike] = None) -> Optional[PhaseMatch]:
    """
    Get the phase for a date.

    Args:
        profile: Cycle configuration
        target_date: Date to analyze, defaults to today

    Returns:
        PhaseMatch, or None if the profile is unconfigured or the day is unclassified
    """
    if target_date is None:
        target_date = date.today()
    return classify_cycle_day(calculate_cycle_day(profile, target_date))

def get_phase_definition(phase_type: PhaseType) -> PhaseDefinition:
    """
    Look up the static definition of a phase.

    Raises:
        ValueError: If the phase type is not in the table
    """
    for phase in PHASES:
        if phase.key == PhaseType(phase_type):
            return phase
    raise ValueError(f"Unknown phase type: {phase_type}")
