"""View cursor: which month is on screen, as an offset from today."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from group_calendar.models.schedule import days_in_month, shift_month, start_weekday


@dataclass(frozen=True)
class ViewCursor:
    today: date
    month_offset: int = 0

    @property
    def year(self) -> int:
        return shift_month(self.today, self.month_offset)[0]

    @property
    def month(self) -> int:
        """Zero-based month."""
        return shift_month(self.today, self.month_offset)[1]

    @property
    def days_in_month(self) -> int:
        return days_in_month(self.year, self.month)

    @property
    def start_weekday(self) -> int:
        return start_weekday(self.year, self.month)

    @property
    def label(self) -> str:
        return f"{self.year}-{self.month + 1:02d}"

    def moved(self, month_offset: int) -> ViewCursor:
        return ViewCursor(today=self.today, month_offset=month_offset)

    def weeks(self) -> list[list[int | None]]:
        """Calendar rows of one-based day numbers, Sunday first.

        Days before the 1st and after the last day are None.
        """
        cells: list[int | None] = [None] * self.start_weekday
        cells.extend(range(1, self.days_in_month + 1))
        while len(cells) % 7:
            cells.append(None)
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]
