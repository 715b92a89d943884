"""Single-day edit: select a state, or deselect it by choosing it again."""

from __future__ import annotations

from group_calendar.models.availability import Availability


def toggle_day(
    availabilities: tuple[Availability, ...] | list[Availability],
    day_index: int,
    value: Availability,
) -> tuple[Availability, ...]:
    """Return a copy with one day toggled.

    If the day already holds `value` it is cleared to UNSET, otherwise it is
    set to `value`. Every other day is unchanged.

    Raises:
        IndexError: day_index is not in 0..len-1 (no negative indexing).
    """
    if not 0 <= day_index < len(availabilities):
        raise IndexError(
            f"Day index {day_index} out of range for a {len(availabilities)}-day month"
        )

    updated = list(availabilities)
    updated[day_index] = Availability.UNSET if updated[day_index] == value else value
    return tuple(updated)
