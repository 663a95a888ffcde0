from __future__ import annotations

import json
from pathlib import Path

import pytest

from gradesheet.logging.miss_log import MissLogBuffer
from gradesheet.models.miss_record import MISS_REASONS, MissRecord
from gradesheet.models.student_record import StudentMarks, StudentRecord


def test_flush_writes_json_lines(tmp_path: Path):
    buf = MissLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(MissRecord.create("sheet1.txt", 99, "زينب", "NOT_FOUND"))
    buf.append(MissRecord.create("sheet2.txt", -1, "", "NO_STUDENTS"))

    path = buf.flush()

    assert path is not None
    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("misses-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["student_name"] == "زينب"
    assert first["reason"] == "NOT_FOUND"
    # non-ASCII stays readable in the file
    assert "زينب" in lines[0]


def test_flush_without_records_creates_nothing(tmp_path: Path):
    buf = MissLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_second_flush_appends_to_same_file(tmp_path: Path):
    buf = MissLogBuffer(logs_dir=tmp_path)
    buf.append(MissRecord.create("a.txt", 1, "أحمد", "NO_MARK"))
    first = buf.flush()
    buf.append(MissRecord.create("b.txt", 2, "سعيد", "NO_MARK"))
    second = buf.flush()

    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2
    # already written, nothing new buffered
    assert buf.flush() == second


def test_record_timestamp_and_reason():
    rec = MissRecord.create("a.txt", 1, "أحمد", "NO_MARK")
    assert rec.timestamp.endswith("Z")
    assert rec.reason in MISS_REASONS

    with pytest.raises(ValueError):
        MissRecord.create("a.txt", 1, "أحمد", "OTHER")


def test_student_and_document_misses_are_counted_by_reason(tmp_path: Path):
    buf = MissLogBuffer(logs_dir=tmp_path)
    buf.add_student_miss("a.txt", StudentRecord(1, "أحمد", StudentMarks()), "NOT_FOUND")
    buf.add_student_miss("a.txt", StudentRecord(77, "أحمد", StudentMarks()), "NOT_FOUND")
    buf.add_student_miss("a.txt", StudentRecord(3, "سعيد", StudentMarks(fard1=12.0)), "NO_MARK")
    buf.add_document_miss("blank.txt")

    assert len(buf) == 4
    assert buf.reason_counts() == {"NOT_FOUND": 2, "NO_MARK": 1, "NO_STUDENTS": 1}

    lines = [json.loads(line) for line in buf.flush().read_text(encoding="utf-8").splitlines()]
    assert [(e["student_number"], e["reason"]) for e in lines] == [
        (1, "NOT_FOUND"),
        (77, "NOT_FOUND"),
        (3, "NO_MARK"),
        (-1, "NO_STUDENTS"),
    ]
    assert lines[3]["document"] == "blank.txt"
    # counts survive the flush
    assert buf.reason_counts()["NOT_FOUND"] == 2


def test_document_reason_is_not_a_student_miss(tmp_path: Path):
    buf = MissLogBuffer(logs_dir=tmp_path)
    with pytest.raises(ValueError):
        buf.add_student_miss("a.txt", StudentRecord(1, "أحمد", StudentMarks()), "NO_STUDENTS")
    assert len(buf) == 0
