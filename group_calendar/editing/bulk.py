"""Bulk edit: set one state on every day matching a weekday filter."""

from __future__ import annotations

from group_calendar.models.availability import Availability, ANY_DAY, WEEKDAY_NAMES


def normalize_day_filter(day_filter: str) -> str:
    """Canonicalize a filter to ANY_DAY or a capitalized weekday name."""
    s = str(day_filter).strip()
    if s == ANY_DAY or s.lower() == "any":
        return ANY_DAY
    for name in WEEKDAY_NAMES:
        if s.lower() == name.lower():
            return name
    raise ValueError(f"Unknown day filter: {day_filter!r}")


def bulk_apply(
    availabilities: tuple[Availability, ...] | list[Availability],
    start_weekday: int,
    day_filter: str,
    value: Availability,
) -> tuple[Availability, ...]:
    """Set `value` on every day whose weekday matches `day_filter`.

    Args:
        availabilities: the viewed month, index 0 = day 1
        start_weekday: weekday of day 1 (0 = Sunday .. 6 = Saturday)
        day_filter: ANY_DAY ("-" or "any") or a weekday name
        value: state to set; a plain set, so applying twice changes nothing

    Returns a new tuple; unmatched days are left as they were.
    """
    if not 0 <= start_weekday <= 6:
        raise ValueError(f"start_weekday must be 0-6, got {start_weekday}")
    day = normalize_day_filter(day_filter)

    return tuple(
        value if day == ANY_DAY or WEEKDAY_NAMES[(start_weekday + i) % 7] == day
        else current
        for i, current in enumerate(availabilities)
    )
