from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""MissRecord model for the unmatched-student log.

One JSON Lines entry per student that could not be written back to the
roster, or per document that yielded no students at all. The key set is fixed.
"""

__all__ = [
    "MissRecord",
    "MISS_REASONS",
]

MISS_REASONS = ("NOT_FOUND", "NO_MARK", "NO_STUDENTS")


@dataclass(frozen=True)
class MissRecord:
    """Structured miss record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        document: OCR text document name
        student_number: recovered student number, -1 for document-level misses
        student_name: recovered student name ("" for document-level misses)
        reason: one of MISS_REASONS
    """
    timestamp: str
    document: str
    student_number: int
    student_name: str
    reason: str

    @staticmethod
    def create(document: str, student_number: int, student_name: str, reason: str) -> MissRecord:
        if reason not in MISS_REASONS:
            raise ValueError(f"unknown miss reason: {reason}")
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return MissRecord(
            timestamp=ts,
            document=document,
            student_number=student_number,
            student_name=student_name,
            reason=reason,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
