from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.miss_record import MISS_REASONS, MissRecord
from ..models.student_record import StudentRecord

"""Unmatched-student log (JSON Lines, fixed key set).

Two kinds of entries:
- student misses: a recovered student with no roster row (NOT_FOUND) or with
  an empty slot for the requested grade (NO_MARK)
- document misses: no student recognized at all (NO_STUDENTS, number -1)

One file per run, ``logs/misses-YYYYMMDD-HHMMSS.log`` (UTC), created on the
first flush that has something to write.
"""

__all__ = [
    "MissRecord",
    "MissLogBuffer",
    "STUDENT_REASONS",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
STUDENT_REASONS = ("NOT_FOUND", "NO_MARK")


class MissLogBuffer:
    """Buffers misses per run; ``reason_counts()`` covers everything ever added."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._pending: list[MissRecord] = []
        self._counts: Counter[str] = Counter()
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"misses-{stamp}.log"
        return self._file_path

    def append(self, record: MissRecord) -> None:
        self._pending.append(record)
        self._counts[record.reason] += 1

    def add_student_miss(self, document: str, student: StudentRecord, reason: str) -> None:
        if reason not in STUDENT_REASONS:
            raise ValueError(f"not a student miss reason: {reason}")
        self.append(MissRecord.create(document, student.number, student.name, reason))

    def add_document_miss(self, document: str) -> None:
        self.append(MissRecord.create(document, -1, "", "NO_STUDENTS"))

    def reason_counts(self) -> dict[str, int]:
        return {reason: self._counts[reason] for reason in MISS_REASONS}

    def __len__(self) -> int:
        return sum(self._counts.values())

    def flush(self) -> Path | None:
        """Write pending records; returns the log path, or None when nothing was ever written."""
        if not self._pending:
            return self._file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._pending)
        self._pending.clear()
        return fp
