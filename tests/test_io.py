"""Tests for the JSON store and the spreadsheet export/import."""

from __future__ import annotations

import json

import openpyxl
import pytest

from group_calendar.io.excel_reader import ExcelReader
from group_calendar.io.excel_writer import ExcelWriter
from group_calendar.io.schedule_store import load_schedules, save_schedules
from group_calendar.models.availability import Availability
from group_calendar.models.schedule import MonthlySchedule

A, M, U, X = Availability.AVAILABLE, Availability.MAYBE, Availability.UNAVAILABLE, Availability.UNSET

SCHEDULES = [
    MonthlySchedule(2024, 2, (A, M, U) + (X,) * 28),
    MonthlySchedule(2024, 1, (M,) * 29),
]


def test_missing_file_is_empty(tmp_path):
    assert load_schedules(tmp_path / "nope.json") == []


def test_store_keeps_order_and_symbols(tmp_path):
    path = tmp_path / "schedules.json"
    save_schedules(path, SCHEDULES)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["schedules"][0]["availabilities"][:3] == ["〇", "△", "×"]
    assert "〇" in path.read_text(encoding="utf-8")
    assert load_schedules(path) == SCHEDULES


def test_store_accepts_bare_list(tmp_path):
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps([s.to_dict() for s in SCHEDULES]), encoding="utf-8")
    assert load_schedules(path) == SCHEDULES


def test_store_rejects_misaligned_month(tmp_path):
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps([{"year": 2024, "month": 1, "availabilities": ["-"] * 30}]),
                    encoding="utf-8")
    with pytest.raises(ValueError):
        load_schedules(path)


def test_excel_sheet_per_month(tmp_path):
    out = tmp_path / "calendar.xlsx"
    with ExcelWriter(out) as writer:
        writer.write_schedules(SCHEDULES)

    wb = openpyxl.load_workbook(out)
    assert wb.sheetnames == ["2024-02", "2024-03"]
    ws = wb["2024-03"]
    assert [c.value for c in ws[1]] == ["Day", "Weekday", "Availability"]
    assert [c.value for c in ws[2]] == [1, "Friday", "〇"]
    assert ws.max_row == 32


def test_excel_reads_back(tmp_path):
    out = tmp_path / "calendar.xlsx"
    with ExcelWriter(out) as writer:
        writer.write_schedules(SCHEDULES)

    with ExcelReader(out) as reader:
        schedules = reader.read_schedules()
    assert sorted(schedules, key=lambda s: s.key) == sorted(SCHEDULES, key=lambda s: s.key)


def test_excel_reader_skips_other_sheets(tmp_path, capsys):
    out = tmp_path / "calendar.xlsx"
    with ExcelWriter(out) as writer:
        writer.write_month(SCHEDULES[1])
    wb = openpyxl.load_workbook(out)
    wb.create_sheet("Notes")
    wb.save(out)

    with ExcelReader(out) as reader:
        schedules = reader.read_schedules()
    assert schedules == [SCHEDULES[1]]
    assert "Notes" in capsys.readouterr().out


def test_store_rejects_repeated_month(tmp_path):
    path = tmp_path / "schedules.json"
    record = SCHEDULES[0].to_dict()
    path.write_text(json.dumps([record, record]), encoding="utf-8")
    with pytest.raises(ValueError, match="Duplicate"):
        load_schedules(path)


def test_lenient_load_keeps_bad_months_for_reporting(tmp_path):
    path = tmp_path / "schedules.json"
    short_feb = {"year": 2024, "month": 1, "availabilities": ["-"] * 28}
    path.write_text(json.dumps([short_feb, short_feb]), encoding="utf-8")

    schedules = load_schedules(path, strict=False)
    assert [s.key for s in schedules] == [(2024, 1), (2024, 1)]
    assert len(schedules[0].availabilities) == 28
