from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..logging.miss_log import MissLogBuffer
from ..matching.roster import detect_roster_structure
from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.match_result import InsertionPlan, RosterStructure
from ..models.processing_result import BatchResult, DocumentStat
from ..models.student_record import MarkType, StudentRecord
from .insertion import plan_mark_insertion, resolve_mark_type
from .pipeline import ExtractionPipeline
from .progress import ProgressTracker

"""Batch orchestration over OCR text documents.

For every document: read the OCR text, run the extraction pipeline, and when
a roster and a grade category are given, plan the grade writes. Per-document
results feed the SUMMARY line; unmatched students go to the miss log.
"""

__all__ = [
    "ProcessingError",
    "DocumentResult",
    "process_document",
    "process_documents",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for batch processing errors."""
    pass


@dataclass
class DocumentResult:
    document: str
    records: list[StudentRecord]
    stat: DocumentStat
    plan: InsertionPlan | None = None

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "document": self.document,
            "strategy": self.stat.strategy,
            "students": [r.as_dict() for r in self.records],
        }
        if self.plan is not None:
            out["mark_type"] = self.plan.mark_type
            out["writes"] = [{"row": w.row, "column": w.column, "value": w.value} for w in self.plan.writes]
            out["not_found"] = list(self.plan.not_found_students)
        return out


def _log_misses(document: str, records: list[StudentRecord], plan: InsertionPlan | None, miss_log: MissLogBuffer) -> None:
    if not records:
        miss_log.add_document_miss(document)
        return
    if plan is None:
        return
    for record, reason in plan.misses:
        miss_log.add_student_miss(document, record, reason)


def process_document(
    path: Path,
    pipeline: ExtractionPipeline,
    roster_rows: Sequence[Sequence[Any]] | None = None,
    roster_structure: RosterStructure | None = None,
    mark_type: MarkType | None = None,
) -> DocumentResult:
    started = time.perf_counter()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProcessingError(f"cannot read OCR text {path}: {e}") from e

    outcome = pipeline.run_text(text)
    plan = None
    if roster_rows is not None and mark_type is not None and outcome.records:
        plan = plan_mark_insertion(outcome.records, mark_type, roster_rows, roster_structure, pipeline.config)

    stat = DocumentStat(
        document=path.name,
        strategy=outcome.strategy.value if outcome.strategy else None,
        students=len(outcome.records),
        matched=(plan.success + len(plan.missing_marks)) if plan else 0,
        not_found=plan.not_found if plan else 0,
        writes=len(plan.writes) if plan else 0,
        elapsed_seconds=time.perf_counter() - started,
    )
    if outcome.records:
        logger.info(f"{path.name}: {stat.students} students ({stat.strategy} strategy)")
    else:
        logger.warning(f"{path.name}: no students recognized")
    return DocumentResult(document=path.name, records=outcome.records, stat=stat, plan=plan)


def process_documents(
    paths: Sequence[Path],
    config: ParserConfig = DEFAULT_CONFIG,
    roster_rows: Sequence[Sequence[Any]] | None = None,
    mark_type: str | MarkType | None = None,
    miss_log: MissLogBuffer | None = None,
) -> tuple[BatchResult, list[DocumentResult]]:
    """Process every OCR text document and aggregate the results.

    Raises:
        ProcessingError: an input file is missing or unreadable
    """
    missing = [p for p in paths if not p.is_file()]
    if missing:
        raise ProcessingError(f"OCR text file not found: {missing[0]}")

    kind = resolve_mark_type(mark_type, config) if mark_type is not None else None
    structure = detect_roster_structure(roster_rows, config) if roster_rows is not None else None
    pipeline = ExtractionPipeline(config)

    start_time = datetime.now(UTC)
    started = time.perf_counter()
    results: list[DocumentResult] = []
    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_document(path)
            result = process_document(path, pipeline, roster_rows, structure, kind)
            results.append(result)
            if miss_log is not None:
                _log_misses(result.document, result.records, result.plan, miss_log)
            progress.finish_document(result.stat.students)
    elapsed = time.perf_counter() - started

    stats = [r.stat for r in results]
    batch = BatchResult(
        documents=len(stats),
        recognized_documents=sum(1 for s in stats if s.recognized),
        total_students=sum(s.students for s in stats),
        total_matched=sum(s.matched for s in stats),
        total_not_found=sum(s.not_found for s in stats),
        total_writes=sum(s.writes for s in stats),
        start_time=start_time,
        end_time=datetime.now(UTC),
        elapsed_seconds=elapsed,
        document_stats=stats,
    )
    return batch, results
