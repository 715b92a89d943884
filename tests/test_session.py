"""Tests for the editing session: ordered edits, cursor moves, saving."""

from __future__ import annotations

import threading
from datetime import date

import pytest

from group_calendar.config import SessionConfig
from group_calendar.io.api_client import SaveResult
from group_calendar.models.availability import Availability
from group_calendar.models.schedule import MonthlySchedule, days_in_month
from group_calendar.session import EditSession, SaveStatus

A, M, U, X = Availability.AVAILABLE, Availability.MAYBE, Availability.UNAVAILABLE, Availability.UNSET
CONFIG = SessionConfig(access_token="tok", group_id="g1")
MARCH_2024 = date(2024, 3, 14)


class FakeGateway:
    def __init__(self, result: SaveResult | None = None, on_save=None):
        self.result = result or SaveResult(success=True, status="ok")
        self.on_save = on_save
        self.calls = []

    def save_schedules(self, access_token, group_id, schedules):
        self.calls.append((access_token, group_id, list(schedules)))
        if self.on_save:
            self.on_save()
        return self.result


def test_end_to_end_from_empty_collection():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    assert len(session.selections) == 31
    assert set(session.selections) == {X}

    session.toggle(0, A)

    assert len(session.schedules) == 1
    s = session.schedules[0]
    assert (s.year, s.month) == (2024, 2)
    assert len(s.availabilities) == 31
    assert s.availabilities[0] == A
    assert set(s.availabilities[1:]) == {X}


def test_edits_build_on_each_other():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    session.toggle(0, A)
    session.bulk_apply(M, "Friday")   # 1 March 2024 is a Friday
    session.toggle(1, U)

    avail = session.schedules[0].availabilities
    assert avail[0] == M
    assert avail[1] == U
    assert avail[7] == M
    assert len(session.schedules) == 1


def test_move_rederives_from_collection():
    april = MonthlySchedule(2024, 3, (U,) * 30)
    session = EditSession(CONFIG, [april], today=MARCH_2024)
    session.toggle(4, A)

    assert session.move_to(1) == april.availabilities
    session.move_to(0)
    assert session.selections[4] == A
    assert session.month_offset == 0


def test_untouched_months_keep_identity():
    jan = MonthlySchedule(2024, 0, (X,) * 31)
    session = EditSession(CONFIG, [jan], today=MARCH_2024)
    session.toggle(0, A)
    assert session.schedules[0] is jan


def test_save_success_marks_saved():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    session.toggle(0, A)
    gateway = FakeGateway()

    result = session.save(gateway)

    assert result.success
    assert session.is_saved
    token, group, sent = gateway.calls[0]
    assert (token, group) == ("tok", "g1")
    assert sent == session.schedules


def test_save_failure_keeps_edits():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    session.toggle(3, M)
    gateway = FakeGateway(SaveResult(success=False, status="http 500", error="boom"))

    result = session.save(gateway)

    assert not result.success
    assert session.status == SaveStatus.SAVE_FAILED
    assert not session.is_saved
    assert session.schedules[0].availabilities[3] == M

    # Retry succeeds with the same edits
    gateway.result = SaveResult(success=True, status="ok")
    assert session.save(gateway).success
    assert session.is_saved


def test_edit_after_save_returns_to_editing():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    session.save(FakeGateway())
    assert session.is_saved
    session.toggle(0, A)
    assert session.status == SaveStatus.EDITING


def test_second_save_while_saving_is_refused():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    inner = []

    def save_again():
        inner.append(session.save(FakeGateway()))

    session.save(FakeGateway(on_save=save_again))

    assert inner[0].status == "busy"
    assert not inner[0].success
    assert session.is_saved


def test_edit_during_save_is_not_marked_saved():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    session.save(FakeGateway(on_save=lambda: session.toggle(0, A)))
    assert session.status == SaveStatus.EDITING
    assert session.schedules[0].availabilities[0] == A


def test_month_grid_pairs_days_with_state():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    session.toggle(0, A)
    grid = session.month_grid()
    assert grid[0][:5] == [None] * 5
    assert grid[0][5] == (1, A)
    assert grid[0][6] == (2, X)
    cells = [c for week in grid for c in week if c is not None]
    assert len(cells) == days_in_month(2024, 2)


def test_duplicate_months_rejected_at_start():
    march = MonthlySchedule(2024, 2, (X,) * 31)
    with pytest.raises(ValueError, match="Duplicate"):
        EditSession(CONFIG, [march, MonthlySchedule(2024, 2, (A,) * 31)], today=MARCH_2024)


def test_gateway_exception_marks_failed_and_propagates():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    session.toggle(0, A)

    def explode():
        raise RuntimeError("connection reset")

    with pytest.raises(RuntimeError):
        session.save(FakeGateway(on_save=explode))
    assert session.status == SaveStatus.SAVE_FAILED
    assert session.schedules[0].availabilities[0] == A

    # The session is usable again after the failure
    assert session.save(FakeGateway()).success


def test_concurrent_edits_are_not_lost():
    session = EditSession(CONFIG, [], today=MARCH_2024)
    start = threading.Barrier(32)  # 31 workers + this thread

    def mark(day_index):
        start.wait()
        session.toggle(day_index, A)

    threads = [threading.Thread(target=mark, args=(i,)) for i in range(31)]
    for t in threads:
        t.start()
    start.wait()
    for t in threads:
        t.join()

    assert len(session.schedules) == 1
    assert session.schedules[0].availabilities == (A,) * 31
