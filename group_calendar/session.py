"""Editing session: the in-memory collection, the viewed month, and saving."""

from __future__ import annotations

import threading
from datetime import date
from enum import Enum
from typing import Protocol

from group_calendar.config import SessionConfig
from group_calendar.editing.bulk import bulk_apply
from group_calendar.editing.cursor import ViewCursor
from group_calendar.editing.toggle import toggle_day
from group_calendar.io.api_client import SaveResult
from group_calendar.models.availability import Availability, ANY_DAY
from group_calendar.models.schedule import (
    MonthlySchedule,
    ensure_unique_months,
    merge_schedule,
    resolve_availabilities,
)


class SaveStatus(Enum):
    EDITING = "editing"
    SAVING = "saving"
    SAVED = "saved"
    SAVE_FAILED = "save-failed"


class ScheduleGateway(Protocol):
    def save_schedules(
        self, access_token: str, group_id: str, schedules: list[MonthlySchedule],
    ) -> SaveResult: ...


class EditSession:
    """One member editing their schedules for one group.

    Edits are read-modify-write on the collection and run under a single
    lock, so each merge sees the result of the previous one. The collection
    is only ever replaced through merge_schedule.
    """

    def __init__(
        self,
        config: SessionConfig,
        schedules: list[MonthlySchedule] | None = None,
        today: date | None = None,
        month_offset: int = 0,
    ):
        self.config = config
        self._schedules: list[MonthlySchedule] = ensure_unique_months(list(schedules or []))
        self._lock = threading.Lock()
        self.cursor = ViewCursor(today=today or date.today(), month_offset=month_offset)
        self.selections: tuple[Availability, ...] = ()
        self.status = SaveStatus.EDITING
        self.last_result: SaveResult | None = None
        self._refresh_selections()

    @property
    def schedules(self) -> list[MonthlySchedule]:
        return list(self._schedules)

    @property
    def month_offset(self) -> int:
        return self.cursor.month_offset

    @property
    def is_saving(self) -> bool:
        return self.status == SaveStatus.SAVING

    @property
    def is_saved(self) -> bool:
        return self.status == SaveStatus.SAVED

    def _refresh_selections(self) -> None:
        self.selections = resolve_availabilities(
            self._schedules, self.cursor.year, self.cursor.month,
        )

    def move_to(self, month_offset: int) -> tuple[Availability, ...]:
        """Point the view at another month and re-derive its availabilities."""
        with self._lock:
            self.cursor = self.cursor.moved(month_offset)
            self._refresh_selections()
            return self.selections

    def _commit(self, updated: tuple[Availability, ...]) -> None:
        # Caller holds the lock
        self._schedules = merge_schedule(self._schedules, MonthlySchedule(
            year=self.cursor.year,
            month=self.cursor.month,
            availabilities=updated,
        ))
        self.selections = updated
        if self.status != SaveStatus.SAVING:
            self.status = SaveStatus.EDITING

    def toggle(self, day_index: int, value: Availability) -> tuple[Availability, ...]:
        """Toggle one day of the viewed month (day_index 0 = the 1st)."""
        with self._lock:
            self._commit(toggle_day(self.selections, day_index, value))
            return self.selections

    def bulk_apply(self, value: Availability, day_filter: str = ANY_DAY) -> tuple[Availability, ...]:
        """Set `value` on every viewed day matching the weekday filter."""
        with self._lock:
            self._commit(bulk_apply(
                self.selections, self.cursor.start_weekday, day_filter, value,
            ))
            return self.selections

    def save(self, gateway: ScheduleGateway) -> SaveResult:
        """Push the whole collection.

        A failed save leaves every edit in place; only the saved flag is
        withheld. A save requested while another is outstanding is refused.
        """
        with self._lock:
            if self.status == SaveStatus.SAVING:
                return SaveResult(success=False, status="busy",
                                  error="A save is already in progress")
            self.status = SaveStatus.SAVING
            snapshot = list(self._schedules)

        try:
            result = gateway.save_schedules(
                self.config.access_token, self.config.group_id, snapshot,
            )
        except Exception:
            with self._lock:
                self.status = SaveStatus.SAVE_FAILED
            raise

        with self._lock:
            # Edits made during the save are not covered by it
            changed = self._schedules != snapshot
            if result.success:
                self.status = SaveStatus.EDITING if changed else SaveStatus.SAVED
            else:
                self.status = SaveStatus.SAVE_FAILED
            self.last_result = result
        return result

    def month_grid(self) -> list[list[tuple[int, Availability] | None]]:
        """Rows of (day, availability) for the viewed month, Sunday first."""
        return [
            [None if day is None else (day, self.selections[day - 1]) for day in week]
            for week in self.cursor.weeks()
        ]
