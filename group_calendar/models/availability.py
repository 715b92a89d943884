"""Availability states and weekday names."""

from __future__ import annotations

from enum import Enum


class Availability(Enum):
    """Per-day availability state.

    Values are the symbols shown in the calendar and sent to the API, so the
    in-memory model and the wire format never diverge.
    """
    AVAILABLE = "〇"
    MAYBE = "△"
    UNAVAILABLE = "×"
    UNSET = "-"

    @classmethod
    def parse(cls, text: str) -> Availability:
        """Parse a symbol ("〇") or a member name ("available")."""
        s = str(text).strip()
        for member in cls:
            if s == member.value or s.upper() == member.name:
                return member
        raise ValueError(f"Unknown availability: {text!r}")


# Symbols offered by the calendar buttons (UNSET is reached by deselecting)
CHOICES = (Availability.AVAILABLE, Availability.MAYBE, Availability.UNAVAILABLE)

# Index = weekday number, 0 = Sunday
WEEKDAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday",
    "Thursday", "Friday", "Saturday",
)

# Bulk filter that matches every day
ANY_DAY = "-"
