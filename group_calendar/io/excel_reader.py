"""Read a schedule workbook written by ExcelWriter."""

from __future__ import annotations

import re
from pathlib import Path

import openpyxl

from group_calendar.models.schedule import MonthlySchedule

_SHEET_RE = re.compile(r"^(\d{4})-(\d{2})$")


def _str(val) -> str:
    """Safely convert a cell value to string."""
    if val is None:
        return ""
    return str(val).strip()


class ExcelReader:
    """Reads month sheets (YYYY-MM) back into MonthlySchedule objects."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._wb = openpyxl.load_workbook(str(self.path), read_only=True, data_only=True)

    def close(self):
        self._wb.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def read_schedules(self) -> list[MonthlySchedule]:
        """Parse every month sheet, in workbook order.

        Sheets whose title is not YYYY-MM are skipped. A month sheet with a
        bad symbol or the wrong number of days raises ValueError.
        """
        schedules = []
        for title in self._wb.sheetnames:
            m = _SHEET_RE.match(title)
            if not m:
                print(f"WARNING: Skipping sheet {title!r} (not a YYYY-MM month)")
                continue
            year, month = int(m.group(1)), int(m.group(2)) - 1

            ws = self._wb[title]
            symbols = []
            for row in ws.iter_rows(min_row=2, max_col=3, values_only=True):
                if row[0] is None:
                    continue
                symbols.append(_str(row[2]) or "-")

            schedules.append(MonthlySchedule.from_dict({
                "year": year, "month": month, "availabilities": symbols,
            }))
        return schedules
