from .availability import Availability, ANY_DAY, CHOICES, WEEKDAY_NAMES
from .schedule import (
    MonthlySchedule,
    days_in_month,
    start_weekday,
    shift_month,
    default_availabilities,
    find_schedule,
    resolve_availabilities,
    merge_schedule,
    ensure_unique_months,
)

__all__ = [
    "Availability", "ANY_DAY", "CHOICES", "WEEKDAY_NAMES",
    "MonthlySchedule",
    "days_in_month", "start_weekday", "shift_month",
    "default_availabilities", "find_schedule", "resolve_availabilities",
    "merge_schedule", "ensure_unique_months",
]
