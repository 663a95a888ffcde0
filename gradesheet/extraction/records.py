from __future__ import annotations

import logging

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.student_record import StudentMarks, StudentRecord
from ..models.table_structure import TableStructure
from ..text.normalize import patterns_for

"""Record extraction from a classified grid (table strategy, last step)."""

__all__ = [
    "extract_records",
]

logger = logging.getLogger(__name__)


def extract_records(structure: TableStructure, config: ParserConfig = DEFAULT_CONFIG) -> list[StudentRecord]:
    """One StudentRecord per non-empty row below the header.

    An empty list tells the pipeline to try the next strategy.
    """
    pats = patterns_for(config.script_range)
    grid = structure.grid
    records: list[StudentRecord] = []

    for row in range(structure.header_row_index + 1, grid.row_count):
        id_cell = grid.cell(row, structure.student_id_column)
        name_cell = grid.cell(row, structure.student_name_column)
        id_text = id_cell.text if id_cell else ""
        name_text = name_cell.text if name_cell else ""
        if not id_text and not name_text:
            continue

        number = row - structure.header_row_index
        if id_cell is not None and id_cell.is_numeric and id_cell.numeric_value is not None:
            number = int(id_cell.numeric_value)
        elif id_text:
            digits = "".join(pats.digit_run.findall(id_text))
            if digits:
                number = int(digits)

        name = name_text or config.placeholder_name.format(number=number)

        values: list[float | None] = []
        for col in structure.mark_columns:
            cell = grid.cell(row, col)
            if cell is not None and cell.is_numeric and cell.numeric_value is not None:
                values.append(round(cell.numeric_value, 2))
            else:
                values.append(None)
        marks = StudentMarks.from_values(values, config.min_grade, config.max_grade)

        records.append(StudentRecord(number=number, name=name, marks=marks))

    logger.debug(f"records: {len(records)} students extracted from table")
    return records
