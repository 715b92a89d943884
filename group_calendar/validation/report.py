"""Summary reports over a schedule collection."""

from __future__ import annotations

import pandas as pd

from group_calendar.models.availability import Availability, WEEKDAY_NAMES
from group_calendar.models.schedule import MonthlySchedule, start_weekday
from group_calendar.validation.collection import check_collection


def schedule_frame(schedules: list[MonthlySchedule]) -> pd.DataFrame:
    """One row per scheduled day: year, month, day, weekday, state."""
    rows = []
    for s in schedules:
        if not 0 <= s.month <= 11:
            continue
        first = start_weekday(s.year, s.month)
        for i, value in enumerate(s.availabilities):
            rows.append({
                "year": s.year,
                "month": s.month,
                "day": i + 1,
                "weekday": WEEKDAY_NAMES[(first + i) % 7],
                "state": value.name.lower() if isinstance(value, Availability) else str(value),
            })
    return pd.DataFrame(rows, columns=["year", "month", "day", "weekday", "state"])


def availability_summary(schedules: list[MonthlySchedule]) -> pd.DataFrame:
    """Count of each state per weekday across all months.

    Index is the weekday (Sunday first), columns are the four states.
    """
    states = [a.name.lower() for a in Availability]
    frame = schedule_frame(schedules)
    if frame.empty:
        return pd.DataFrame(0, index=list(WEEKDAY_NAMES), columns=states)

    counts = pd.crosstab(frame["weekday"], frame["state"])
    return counts.reindex(index=list(WEEKDAY_NAMES), columns=states, fill_value=0)


def generate_report(schedules: list[MonthlySchedule]) -> str:
    """Text report: invariant violations, per-month counts, weekday summary."""
    lines = []
    lines.append("=" * 60)
    lines.append("AVAILABILITY REPORT")
    lines.append("=" * 60)

    # 1. Invariants
    violations = check_collection(schedules)
    lines.append(f"\n## COLLECTION ({len(schedules)} months, {len(violations)} violations)")
    if violations:
        for v in violations:
            lines.append(f"  Entry {v.index} ({v.year}-{v.month + 1:02d}): {v.kind}: {v.detail}")
    else:
        lines.append("  Month keys unique, all months aligned to their day count.")

    # 2. Per month
    lines.append("\n## MONTHS")
    frame = schedule_frame(schedules)
    if frame.empty:
        lines.append("  No months scheduled.")
    else:
        per_month = pd.crosstab([frame["year"], frame["month"]], frame["state"])
        for (year, month), counts in per_month.iterrows():
            parts = ", ".join(f"{state}={int(n)}" for state, n in counts.items() if n)
            lines.append(f"  {year}-{month + 1:02d}: {parts}")

    # 3. Weekday summary
    lines.append("\n## BY WEEKDAY")
    summary = availability_summary(schedules)
    lines.append(summary.to_string())

    lines.append("\n" + "=" * 60)
    return "\n".join(lines)
