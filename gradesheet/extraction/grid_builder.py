from __future__ import annotations

import logging

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.grid import Cell, Grid, GridBuilder
from ..text.normalize import PatternSet, parse_numeric, patterns_for

"""Grid builder: OCR lines -> rectangular grid of typed cells.

OCR output carries no reliable column delimiters, so rows and cells are
inferred heuristically:

1. locate the first line of the table (header keyword, else the line before
   the first numbered line)
2. keep the lines that look like table rows (loose re-scan when too few)
3. split each kept line into segments (wide gaps / pipes, else by pulling
   out grade-like tokens and appending them as trailing cells)
4. pad every row to the widest one

An empty Grid means "no table here" and lets the caller fall back.
"""

__all__ = [
    "find_table_start",
    "select_table_lines",
    "split_segments",
    "build_grid",
]

logger = logging.getLogger(__name__)


def find_table_start(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> int | None:
    """Index of the first table line, or None when nothing looks tabular."""
    for idx, line in enumerate(lines):
        if any(kw in line for kw in config.table_start_keywords):
            return idx
    pats = patterns_for(config.script_range)
    for idx, line in enumerate(lines):
        if pats.leading_int.match(line):
            # keep the line above: it may be an unlabeled header
            return max(0, idx - 1)
    return None


def _looks_like_row(line: str, pats: PatternSet) -> bool:
    return bool(
        pats.leading_digits.match(line)
        or pats.pipe_int.match(line)
        or pats.native_only.match(line)
        or pats.decimal_pair.search(line)
    )


def _looks_like_loose_row(line: str, pats: PatternSet, config: ParserConfig) -> bool:
    if not config.loose_min_line_length <= len(line) <= config.loose_max_line_length:
        return False
    return bool(pats.native_char.search(line) or any(ch.isdigit() for ch in line))


def select_table_lines(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> list[str]:
    """Lines (from the table start onward) that become grid rows.

    The start line itself is always kept so a header survives even when it
    matches none of the row shapes.
    """
    start = find_table_start(lines, config)
    if start is None:
        logger.debug("grid: no table start line found")
        return []
    pats = patterns_for(config.script_range)
    candidates = lines[start:]

    selected = [0]
    for idx in range(1, len(candidates)):
        line = candidates[idx].strip()
        if line and _looks_like_row(line, pats):
            selected.append(idx)

    if len(selected) < config.min_table_rows and len(candidates) > config.loose_scan_min_lines:
        logger.debug(f"grid: only {len(selected)} rows detected, switching to loose scan")
        selected = [0]
        for idx in range(1, len(candidates)):
            line = candidates[idx].strip()
            if _looks_like_loose_row(line, pats, config):
                selected.append(idx)

    return [candidates[idx] for idx in selected]


def split_segments(line: str, config: ParserConfig = DEFAULT_CONFIG) -> list[str]:
    pats = patterns_for(config.script_range)
    segments = [s.strip() for s in pats.column_gap.split(line) if s.strip()]
    if len(segments) <= 1:
        marks = pats.mark_token.findall(line)
        if marks:
            remainder = pats.mark_token.sub("|", line)
            segments = [s.strip() for s in remainder.split("|") if s.strip()]
            segments.extend(marks)
    return segments


def _make_cell(text: str, row: int, col: int) -> Cell:
    value = parse_numeric(text)
    return Cell(text=text, row=row, col=col, is_numeric=value is not None, numeric_value=value)


def build_grid(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> Grid:
    """Build the rectangular cell grid for ``lines`` (already digit-normalized)."""
    builder = GridBuilder()
    for line in select_table_lines(lines, config):
        row = len(builder)
        cells = [_make_cell(text, row, col) for col, text in enumerate(split_segments(line, config))]
        builder.add_row(cells)
    grid = builder.build()
    logger.debug(f"grid: {grid.row_count} rows x {grid.col_count} cols")
    return grid
