"""Schedule collection invariants."""

from __future__ import annotations

from dataclasses import dataclass

from group_calendar.models.availability import Availability
from group_calendar.models.schedule import MonthlySchedule, days_in_month


@dataclass
class CollectionViolation:
    index: int          # position in the collection
    year: int
    month: int
    kind: str           # "duplicate", "bad-month", "length", "value"
    detail: str


def check_collection(schedules: list[MonthlySchedule]) -> list[CollectionViolation]:
    """Check month-key uniqueness and day/index alignment.

    MonthlySchedule.from_dict already rejects most of this on load; this
    catches collections assembled in code.
    """
    violations = []
    seen: dict[tuple[int, int], int] = {}

    for i, s in enumerate(schedules):
        if s.key in seen:
            violations.append(CollectionViolation(
                index=i, year=s.year, month=s.month, kind="duplicate",
                detail=f"same month as entry {seen[s.key]}",
            ))
        else:
            seen[s.key] = i

        if not 0 <= s.month <= 11:
            violations.append(CollectionViolation(
                index=i, year=s.year, month=s.month, kind="bad-month",
                detail=f"month {s.month} not in 0-11",
            ))
            continue

        expected = days_in_month(s.year, s.month)
        if len(s.availabilities) != expected:
            violations.append(CollectionViolation(
                index=i, year=s.year, month=s.month, kind="length",
                detail=f"{len(s.availabilities)} days, expected {expected}",
            ))

        bad = [d + 1 for d, a in enumerate(s.availabilities) if not isinstance(a, Availability)]
        if bad:
            violations.append(CollectionViolation(
                index=i, year=s.year, month=s.month, kind="value",
                detail=f"invalid state on day(s) {bad}",
            ))

    return violations
