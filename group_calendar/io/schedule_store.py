"""Local JSON file holding a member's schedule collection."""

from __future__ import annotations

import json
from pathlib import Path

from group_calendar.models.schedule import MonthlySchedule, ensure_unique_months


def load_schedules(path: str | Path, strict: bool = True) -> list[MonthlySchedule]:
    """Read the collection. A missing file is an empty collection.

    Accepts either a bare list of records or {"schedules": [...]}. With
    strict=False, misaligned or repeated months are loaded as they are so a
    validator can report them; otherwise they raise ValueError.
    """
    path = Path(path)
    if not path.exists():
        return []

    with path.open("r", encoding="utf-8") as fh:
        raw = json.load(fh)
    records = raw.get("schedules", []) if isinstance(raw, dict) else raw
    schedules = [MonthlySchedule.from_dict(r, strict=strict) for r in records]
    if strict:
        ensure_unique_months(schedules)
    return schedules


def save_schedules(path: str | Path, schedules: list[MonthlySchedule]) -> None:
    """Write the whole collection, keeping the availability symbols readable."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(
            {"schedules": [s.to_dict() for s in schedules]},
            fh, indent=2, ensure_ascii=False,
        )
        fh.write("\n")
