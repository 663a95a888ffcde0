from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..matching.fuzzy import match_student
from ..matching.roster import detect_roster_structure
from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.match_result import NOT_FOUND, CellWrite, InsertionPlan, RosterStructure
from ..models.student_record import MarkType, StudentRecord

"""Mark insertion planning.

Turns recovered students into cell writes for one grade category of the
roster. The spreadsheet writer applies the plan; nothing here touches a
workbook.
"""

__all__ = [
    "UnknownMarkTypeError",
    "resolve_mark_type",
    "format_mark",
    "plan_mark_insertion",
]

logger = logging.getLogger(__name__)


class UnknownMarkTypeError(ValueError):
    """Raised when a grade category label is not recognized."""


def resolve_mark_type(label: str | MarkType, config: ParserConfig = DEFAULT_CONFIG) -> MarkType:
    if isinstance(label, MarkType):
        return label
    text = label.strip()
    internal = config.mark_display_names.get(text, text)
    try:
        return MarkType(internal)
    except ValueError as e:
        raise UnknownMarkTypeError(f"unknown mark type: {label!r}") from e


def format_mark(value: float) -> str:
    return f"{value:.2f}"


def plan_mark_insertion(
    records: Iterable[StudentRecord],
    mark_type: str | MarkType,
    rows: Sequence[Sequence[Any]],
    structure: RosterStructure | None = None,
    config: ParserConfig = DEFAULT_CONFIG,
) -> InsertionPlan:
    """Match each record against the roster and plan the grade writes.

    A matched student whose grade slot is empty is neither a success nor a
    miss; it is listed in ``missing_marks``.
    """
    kind = resolve_mark_type(mark_type, config)
    if structure is None:
        structure = detect_roster_structure(rows, config)
    column = structure.mark_columns.get(kind.value, NOT_FOUND)
    plan = InsertionPlan(mark_type=kind.value)

    for record in records:
        result = match_student(
            record.number, record.name, rows, structure.number_column, structure.name_column, config
        )
        if not result.found:
            plan.not_found += 1
            plan.not_found_students.append(record.name)
            plan.misses.append((record, "NOT_FOUND"))
            continue
        value = record.marks.get(kind)
        if column == NOT_FOUND or value is None:
            plan.missing_marks.append(record.name)
            plan.misses.append((record, "NO_MARK"))
            continue
        plan.writes.append(CellWrite(row=result.row_index, column=column, value=format_mark(value)))
        plan.success += 1

    logger.debug(
        f"insertion: {kind.value} success={plan.success} not_found={plan.not_found} "
        f"missing_marks={len(plan.missing_marks)}"
    )
    return plan
