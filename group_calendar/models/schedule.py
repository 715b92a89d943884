"""Monthly schedules, calendar arithmetic, lookup and merge."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, replace
from datetime import date

from group_calendar.models.availability import Availability


def _check_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be 0-11 (0 = January), got {month}")


def days_in_month(year: int, month: int) -> int:
    """Number of days in a zero-based month."""
    _check_month(month)
    return calendar.monthrange(year, month + 1)[1]


def start_weekday(year: int, month: int) -> int:
    """Weekday of the 1st of a zero-based month, 0 = Sunday .. 6 = Saturday."""
    _check_month(month)
    monday_based = calendar.monthrange(year, month + 1)[0]  # 0 = Monday
    return (monday_based + 1) % 7


def shift_month(today: date, offset: int) -> tuple[int, int]:
    """Return (year, zero-based month) that is `offset` months from today's month."""
    total = today.year * 12 + (today.month - 1) + offset
    return total // 12, total % 12


@dataclass(frozen=True)
class MonthlySchedule:
    """One calendar month of availability for a group member."""
    year: int
    month: int                               # 0-11
    availabilities: tuple[Availability, ...]  # index 0 = day 1

    @property
    def key(self) -> tuple[int, int]:
        return (self.year, self.month)

    def to_dict(self) -> dict:
        """Wire record: availabilities as their symbols."""
        return {
            "year": self.year,
            "month": self.month,
            "availabilities": [a.value for a in self.availabilities],
        }

    @classmethod
    def from_dict(cls, raw: dict, strict: bool = True) -> MonthlySchedule:
        """Build a schedule from a wire record, rejecting malformed ones.

        With strict=False the month range and day count are not checked, so
        check_collection can report them instead. Unknown symbols and missing
        fields are always rejected.
        """
        try:
            year = int(raw["year"])
            month = int(raw["month"])
            symbols = list(raw["availabilities"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed schedule record: {raw!r}") from exc

        if not strict:
            return cls(year=year, month=month,
                       availabilities=tuple(Availability.parse(s) for s in symbols))

        expected = days_in_month(year, month)
        if len(symbols) != expected:
            raise ValueError(
                f"Schedule {year}-{month + 1:02d} has {len(symbols)} days, "
                f"expected {expected}"
            )
        return cls(
            year=year,
            month=month,
            availabilities=tuple(Availability.parse(s) for s in symbols),
        )


def ensure_unique_months(schedules: list[MonthlySchedule]) -> list[MonthlySchedule]:
    """Return `schedules` unchanged, or raise ValueError on a repeated (year, month)."""
    seen = set()
    for schedule in schedules:
        if schedule.key in seen:
            raise ValueError(
                f"Duplicate schedule for {schedule.year}-{schedule.month + 1:02d}"
            )
        seen.add(schedule.key)
    return schedules


def default_availabilities(year: int, month: int) -> tuple[Availability, ...]:
    """All-unset sequence for a month, one entry per day."""
    return (Availability.UNSET,) * days_in_month(year, month)


def find_schedule(
    schedules: list[MonthlySchedule],
    year: int,
    month: int,
) -> MonthlySchedule | None:
    """Find the schedule for (year, month), or None if not yet scheduled."""
    for schedule in schedules:
        if schedule.year == year and schedule.month == month:
            return schedule
    return None


def resolve_availabilities(
    schedules: list[MonthlySchedule],
    year: int,
    month: int,
) -> tuple[Availability, ...]:
    """Availabilities for a month, defaulting to all unset."""
    schedule = find_schedule(schedules, year, month)
    if schedule is None:
        return default_availabilities(year, month)
    return schedule.availabilities


def merge_schedule(
    schedules: list[MonthlySchedule],
    updated: MonthlySchedule,
) -> list[MonthlySchedule]:
    """Return a new collection with `updated`'s month replaced.

    Entries for other months are passed through as the same objects and in
    the same order. A month not yet in the collection is appended.
    """
    expected = days_in_month(updated.year, updated.month)
    if len(updated.availabilities) != expected:
        raise ValueError(
            f"Schedule {updated.year}-{updated.month + 1:02d} has "
            f"{len(updated.availabilities)} days, expected {expected}"
        )

    merged = []
    found = False
    for schedule in schedules:
        if schedule.year == updated.year and schedule.month == updated.month:
            merged.append(replace(schedule, availabilities=tuple(updated.availabilities)))
            found = True
        else:
            merged.append(schedule)

    if not found:
        merged.append(MonthlySchedule(
            year=updated.year,
            month=updated.month,
            availabilities=tuple(updated.availabilities),
        ))
    return merged
