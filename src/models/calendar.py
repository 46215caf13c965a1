"""
Model definitions for the month calendar grid.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel

from src.models.phase import PhaseType

WEEK_LENGTH = 7


class CalendarCell(BaseModel):
    """
    A single day cell of the month grid. Cells are derived and never stored.
    """
    date: date
    day_number: int
    in_current_month: bool
    phase: Optional[PhaseType] = None
    phase_class: Optional[str] = None
    is_today: bool = False
    event_dot: Optional[str] = None


class CalendarGrid(BaseModel):
    """
    Month grid made of whole weeks, padded with cells from adjacent months.
    """
    year: int
    month: int
    cells: List[CalendarCell]

    @property
    def weeks(self) -> List[List[CalendarCell]]:
        """Split the cells into rows of seven."""
        return [
            self.cells[i:i + WEEK_LENGTH]
            for i in range(0, len(self.cells), WEEK_LENGTH)
        ]

    @property
    def month_cells(self) -> List[CalendarCell]:
        return [cell for cell in self.cells if cell.in_current_month]
