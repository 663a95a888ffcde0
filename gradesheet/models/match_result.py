from __future__ import annotations

from dataclasses import dataclass, field

from .student_record import StudentRecord

"""Matching models: MatchResult, RosterStructure, CellWrite, InsertionPlan.

MatchResult is computed per lookup and never cached. InsertionPlan describes
the cell writes an external spreadsheet writer should perform; it never touches
a workbook itself.
"""

__all__ = [
    "NOT_FOUND",
    "MatchResult",
    "RosterStructure",
    "CellWrite",
    "InsertionPlan",
]

NOT_FOUND = -1


@dataclass(frozen=True)
class MatchResult:
    """Roster row index of a matched student, or NOT_FOUND."""
    row_index: int = NOT_FOUND
    method: str | None = None  # "id" / "name"
    score: float | None = None  # name similarity when method == "name"

    @property
    def found(self) -> bool:
        return self.row_index != NOT_FOUND

    @staticmethod
    def not_found() -> MatchResult:
        return MatchResult()


@dataclass(frozen=True)
class RosterStructure:
    """Column layout of an external roster (rows of raw cell values)."""
    header_row_index: int
    number_column: int
    name_column: int  # NOT_FOUND when no name column could be located
    mark_columns: dict[str, int]  # MarkType value -> column index (NOT_FOUND if unresolved)
    total_rows: int
    headers: tuple[str, ...] = ()


@dataclass(frozen=True)
class CellWrite:
    row: int
    column: int
    value: str  # two-decimal grade text


@dataclass
class InsertionPlan:
    """Planned grade writes plus success / not-found tallies for one mark type."""
    mark_type: str
    writes: list[CellWrite] = field(default_factory=list)
    success: int = 0
    not_found: int = 0
    not_found_students: list[str] = field(default_factory=list)
    missing_marks: list[str] = field(default_factory=list)  # matched but slot empty
    misses: list[tuple[StudentRecord, str]] = field(default_factory=list)  # (record, "NOT_FOUND" / "NO_MARK")
