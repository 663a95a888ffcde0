from __future__ import annotations

import logging
from collections import Counter

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.grid import Grid
from ..models.table_structure import TableStructure
from ..text.normalize import patterns_for

"""Structure identification: header row + column roles of a Grid.

Column roles come from two passes:

- header pass: keywords in the header cells. Each cell takes at most one role
  (id > name > mark) so roles stay distinct. A header that OCR merged into a
  single cell carries no column positions and is ignored.
- content pass (only when a role is still missing): per-column statistics over
  the rows below the header.

Whatever is left unresolved falls back to defaults (id 0, name 1, marks = the
remaining columns). This step never fails on a non-empty grid.
"""

__all__ = [
    "find_header_row",
    "identify_structure",
]

logger = logging.getLogger(__name__)

UNRESOLVED = -1


def find_header_row(grid: Grid, config: ParserConfig = DEFAULT_CONFIG) -> int:
    keywords = [kw.lower() for kw in config.header_keywords]
    for row in range(min(config.header_scan_rows, grid.row_count)):
        text = grid.row_text(row).lower()
        if any(kw in text for kw in keywords):
            return row
    return 0


def _header_role(text: str, config: ParserConfig) -> str | None:
    text = text.lower()
    if any(kw.lower() in text for kw in config.id_keywords):
        return "id"
    if any(kw.lower() in text for kw in config.name_keywords):
        return "name"
    if any(kw.lower() in text for kw in config.mark_keywords):
        return "mark"
    return None


def _header_pass(grid: Grid, header_row: int, config: ParserConfig) -> tuple[int, int, list[int]]:
    id_col, name_col = UNRESOLVED, UNRESOLVED
    marks: list[int] = []
    cells = grid.rows[header_row]
    if sum(1 for c in cells if c.text.strip()) < 2:
        return id_col, name_col, marks
    for col, cell in enumerate(cells):
        role = _header_role(cell.text, config)
        if role == "id":
            id_col = col
        elif role == "name":
            name_col = col
        elif role == "mark":
            marks.append(col)
    # a later cell may have re-claimed id/name; keep roles disjoint
    marks = [c for c in marks if c not in (id_col, name_col)]
    return id_col, name_col, marks


def _best_column(counts: Counter[int], excluded: set[int]) -> int:
    best, best_count = UNRESOLVED, 0
    for col in sorted(counts):
        if col in excluded:
            continue
        if counts[col] > best_count:
            best, best_count = col, counts[col]
    return best


def _content_pass(
    grid: Grid,
    header_row: int,
    id_col: int,
    name_col: int,
    marks: list[int],
    config: ParserConfig,
) -> tuple[int, int, list[int]]:
    pats = patterns_for(config.script_range)
    content_rows = grid.rows[header_row + 1 :]
    numeric: Counter[int] = Counter()
    native: Counter[int] = Counter()
    id_like: Counter[int] = Counter()
    mark_like: Counter[int] = Counter()

    for row in content_rows:
        for col, cell in enumerate(row):
            text = cell.text.strip()
            if cell.is_numeric and cell.numeric_value is not None:
                numeric[col] += 1
                if config.min_grade <= cell.numeric_value <= config.max_grade:
                    mark_like[col] += 1
            if text and pats.native_only.match(text):
                native[col] += 1
            if pats.institutional_id.search(text) or pats.bare_id.match(text):
                id_like[col] += 1

    if id_col == UNRESOLVED:
        id_col = _best_column(id_like, {name_col, *marks})
        if id_col == UNRESOLVED:
            id_col = _claim_column(0, name_col, marks, grid.col_count)

    if name_col == UNRESOLVED:
        name_col = _best_column(native, {id_col, *marks})

    if not marks:
        limit = len(content_rows) * config.mark_column_ratio
        candidates = [c for c in range(grid.col_count) if c not in (id_col, name_col)]
        marks = [c for c in candidates if mark_like[c] > limit]
        if not marks:
            marks = [c for c in candidates if numeric[c] > 0]

    return id_col, name_col, marks


def _first_free(preferred: int, taken: set[int], col_count: int) -> int:
    for col in [*range(preferred, col_count), *range(0, min(preferred, col_count))]:
        if col not in taken:
            return col
    return col_count


def _claim_column(preferred: int, other_role: int, marks: list[int], col_count: int) -> int:
    """First free column for an id/name role.

    When mark columns cover every other column, the role takes one back from
    them. Only a single-column grid is left without a distinct slot.
    """
    col = _first_free(preferred, {other_role, *marks}, col_count)
    if col == col_count:
        col = _first_free(preferred, {other_role}, col_count)
    return col


def identify_structure(grid: Grid, config: ParserConfig = DEFAULT_CONFIG) -> TableStructure | None:
    """Classify the grid. Returns None only for an empty grid."""
    if grid.is_empty():
        return None
    header_row = find_header_row(grid, config)
    id_col, name_col, marks = _header_pass(grid, header_row, config)

    if UNRESOLVED in (id_col, name_col) or not marks:
        logger.debug("structure: header incomplete, inferring columns from content")
        id_col, name_col, marks = _content_pass(grid, header_row, id_col, name_col, marks, config)

    marks = sorted(set(marks))
    if id_col == UNRESOLVED:
        id_col = _claim_column(0, name_col, marks, grid.col_count)
    if name_col == UNRESOLVED:
        name_col = _claim_column(1, id_col, marks, grid.col_count)
    marks = [c for c in marks if c not in (id_col, name_col)]
    if not marks:
        marks = [c for c in range(grid.col_count) if c not in (id_col, name_col)]

    logger.debug(f"structure: header_row={header_row} id={id_col} name={name_col} marks={marks}")
    return TableStructure(
        header_row_index=header_row,
        student_id_column=id_col,
        student_name_column=name_col,
        mark_columns=tuple(marks),
        grid=grid,
    )
