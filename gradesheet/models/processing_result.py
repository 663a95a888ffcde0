from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Batch processing result models.

Aggregates per-document extraction and matching metrics for the SUMMARY line.
"""

__all__ = [
    "DocumentStat",
    "BatchResult",
]


@dataclass(frozen=True)
class DocumentStat:
    """Per-document statistics."""
    document: str
    strategy: str | None  # pipeline state that produced the records, None if nothing recognized
    students: int
    matched: int = 0
    not_found: int = 0
    writes: int = 0
    elapsed_seconds: float = 0.0

    @property
    def recognized(self) -> bool:
        return self.students > 0


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results over every processed document."""
    documents: int
    recognized_documents: int
    total_students: int
    total_matched: int
    total_not_found: int
    total_writes: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    document_stats: list[DocumentStat] | None = None
