from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from gradesheet.logging.miss_log import MissLogBuffer
from gradesheet.models.config_models import DEFAULT_CONFIG
from gradesheet.services.orchestrator import ProcessingError, process_documents

"""Orchestrator over real OCR text files (no CLI layer)."""


@pytest.fixture
def documents(temp_workdir: Path, massar_ocr_text: str, table_lines: list[str]) -> list[Path]:
    data = temp_workdir / "data"
    paths = [data / "massar.txt", data / "plain.txt", data / "empty.txt"]
    paths[0].write_text(massar_ocr_text, encoding="utf-8")
    paths[1].write_text("\n".join(table_lines), encoding="utf-8")
    paths[2].write_text("", encoding="utf-8")
    return paths


def test_batch_statistics(documents: list[Path], roster_rows: list[list[Any]], temp_workdir: Path):
    miss_log = MissLogBuffer(logs_dir=temp_workdir / "logs")

    batch, results = process_documents(documents, DEFAULT_CONFIG, roster_rows, "fard1", miss_log)

    assert batch.documents == 3
    assert batch.recognized_documents == 2
    assert batch.total_students == 5
    assert [r.stat.strategy for r in results] == ["table", "table", None]
    assert [r.stat.students for r in results] == [3, 2, 0]
    assert results[0].stat.writes == 3
    assert batch.total_writes == sum(r.stat.writes for r in results)
    assert batch.total_matched + batch.total_not_found == batch.total_students
    assert batch.start_time <= batch.end_time
    assert batch.document_stats == [r.stat for r in results]
    assert len(miss_log) >= 1


def test_without_roster_no_plan(documents: list[Path]):
    batch, results = process_documents(documents[:1])

    assert results[0].plan is None
    assert batch.total_matched == 0
    assert batch.total_writes == 0
    assert "writes" not in results[0].as_dict()


def test_missing_document(temp_workdir: Path):
    with pytest.raises(ProcessingError, match="not found"):
        process_documents([temp_workdir / "data" / "absent.txt"])


def test_miss_log_follows_records_not_names(temp_workdir: Path, roster_rows: list[list[Any]]):
    sheet = temp_workdir / "data" / "twins.txt"
    sheet.write_text(
        "\n".join(["رقم اسم التلميذ الفرض1 الفرض2", "1 زينب 15.50 12.00", "88 زينب 18.00 09.50"]),
        encoding="utf-8",
    )
    miss_log = MissLogBuffer(logs_dir=temp_workdir / "logs")

    batch, _ = process_documents([sheet], DEFAULT_CONFIG, roster_rows, "fard1", miss_log)

    assert batch.total_writes == 1
    assert batch.total_not_found == 1
    assert miss_log.reason_counts() == {"NOT_FOUND": 1, "NO_MARK": 0, "NO_STUDENTS": 0}
    entries = [json.loads(line) for line in miss_log.flush().read_text(encoding="utf-8").splitlines()]
    assert [(e["student_number"], e["student_name"], e["reason"]) for e in entries] == [(88, "زينب", "NOT_FOUND")]
