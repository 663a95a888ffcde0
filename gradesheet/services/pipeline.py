from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from ..extraction.basic_extractor import extract_basic
from ..extraction.grid_builder import build_grid
from ..extraction.pattern_extractor import extract_by_patterns
from ..extraction.records import extract_records
from ..extraction.structure import identify_structure
from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.student_record import StudentRecord
from ..models.table_structure import TableStructure
from ..text.normalize import split_ocr_lines

"""Extraction pipeline coordinator.

Fixed strategy order, driven as a small state machine:

    TRY_TABLE -> TRY_PATTERN -> TRY_BASIC -> DONE

A state advances only when its strategy returns no records. The first
non-empty result is returned as is; results are never merged.
"""

__all__ = [
    "PipelineState",
    "ExtractionOutcome",
    "ExtractionPipeline",
    "detect_table",
    "extract_from_table",
    "extract_students",
]

logger = logging.getLogger(__name__)

Strategy = Callable[[list[str], ParserConfig], list[StudentRecord]]


class PipelineState(str, Enum):
    TRY_TABLE = "table"
    TRY_PATTERN = "pattern"
    TRY_BASIC = "basic"
    DONE = "done"


_NEXT_STATE = {
    PipelineState.TRY_TABLE: PipelineState.TRY_PATTERN,
    PipelineState.TRY_PATTERN: PipelineState.TRY_BASIC,
    PipelineState.TRY_BASIC: PipelineState.DONE,
}


def detect_table(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> TableStructure | None:
    """Grid building + structure identification. None when no table is found."""
    grid = build_grid(lines, config)
    if grid.is_empty():
        return None
    return identify_structure(grid, config)


def extract_from_table(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> list[StudentRecord]:
    structure = detect_table(lines, config)
    if structure is None:
        return []
    return extract_records(structure, config)


DEFAULT_STRATEGIES: dict[PipelineState, Strategy] = {
    PipelineState.TRY_TABLE: extract_from_table,
    PipelineState.TRY_PATTERN: extract_by_patterns,
    PipelineState.TRY_BASIC: extract_basic,
}


@dataclass(frozen=True)
class ExtractionOutcome:
    records: list[StudentRecord]
    strategy: PipelineState | None  # state that produced the records
    attempted: tuple[PipelineState, ...] = field(default_factory=tuple)


class ExtractionPipeline:
    """Runs the strategies in order until one yields records.

    ``strategies`` may replace individual states (tests count calls this way).
    """

    def __init__(
        self,
        config: ParserConfig = DEFAULT_CONFIG,
        strategies: Mapping[PipelineState, Strategy] | None = None,
    ) -> None:
        self.config = config
        self.strategies: dict[PipelineState, Strategy] = dict(DEFAULT_STRATEGIES)
        if strategies:
            self.strategies.update(strategies)

    def run(self, lines: list[str]) -> ExtractionOutcome:
        state = PipelineState.TRY_TABLE
        attempted: list[PipelineState] = []
        while state is not PipelineState.DONE:
            attempted.append(state)
            records = self.strategies[state](lines, self.config)
            if records:
                logger.debug(f"pipeline: {state.value} strategy produced {len(records)} students")
                return ExtractionOutcome(records=records, strategy=state, attempted=tuple(attempted))
            logger.debug(f"pipeline: {state.value} strategy produced nothing")
            state = _NEXT_STATE[state]
        return ExtractionOutcome(records=[], strategy=None, attempted=tuple(attempted))

    def run_text(self, text: str) -> ExtractionOutcome:
        return self.run(split_ocr_lines(text))


def extract_students(text: str, config: ParserConfig = DEFAULT_CONFIG) -> list[StudentRecord]:
    """Public entry point: raw OCR text -> student records (possibly empty)."""
    return ExtractionPipeline(config).run_text(text).records
