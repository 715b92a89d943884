"""Export the schedule collection to an .xlsx workbook."""

from __future__ import annotations

from pathlib import Path

import openpyxl
from openpyxl.styles import Font, PatternFill

from group_calendar.models.availability import Availability, WEEKDAY_NAMES
from group_calendar.models.schedule import MonthlySchedule, start_weekday

HEADERS = ("Day", "Weekday", "Availability")

# Weekend header colours match the calendar view (Sun red, Sat blue)
_WEEKEND_FILL = {
    "Sunday": PatternFill("solid", fgColor="FFDC2626"),
    "Saturday": PatternFill("solid", fgColor="FF2563EB"),
}


def sheet_name(year: int, month: int) -> str:
    """Sheet title for a zero-based month, e.g. 2024-03 for March."""
    return f"{year}-{month + 1:02d}"


class ExcelWriter:
    """Writes one sheet per month: Day | Weekday | Availability.

    Availability cells hold the same symbols as the wire format, so the
    workbook can be read back with ExcelReader.
    """

    def __init__(self, output_path: str | Path):
        self.output_path = Path(output_path)
        self._wb = openpyxl.Workbook()
        # Drop the default empty sheet; every sheet we add is a month
        self._wb.remove(self._wb.active)

    def close(self):
        self._wb.close()

    def save(self):
        if not self._wb.sheetnames:
            self._wb.create_sheet("Empty")
        self._wb.save(str(self.output_path))

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.save()
        self.close()

    def write_schedules(self, schedules: list[MonthlySchedule]) -> None:
        """Write every schedule in chronological order."""
        for schedule in sorted(schedules, key=lambda s: s.key):
            self.write_month(schedule)

    def write_month(self, schedule: MonthlySchedule) -> None:
        title = sheet_name(schedule.year, schedule.month)
        if title in self._wb.sheetnames:
            del self._wb[title]
        ws = self._wb.create_sheet(title)

        ws.append(HEADERS)
        for cell in ws[1]:
            cell.font = Font(bold=True)

        first = start_weekday(schedule.year, schedule.month)
        for i, value in enumerate(schedule.availabilities):
            weekday = WEEKDAY_NAMES[(first + i) % 7]
            ws.append((i + 1, weekday, value.value))
            row = ws.max_row
            if weekday in _WEEKEND_FILL:
                ws.cell(row=row, column=2).fill = _WEEKEND_FILL[weekday]
            if value == Availability.AVAILABLE:
                ws.cell(row=row, column=3).font = Font(bold=True)

        ws.column_dimensions["B"].width = 12
        ws.column_dimensions["C"].width = 14
