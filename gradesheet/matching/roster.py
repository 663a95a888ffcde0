from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.match_result import NOT_FOUND, RosterStructure
from ..models.student_record import MARK_ORDER
from ..text.normalize import patterns_for

"""Roster (spreadsheet side) structure detection.

Locates the header row, the student number and name columns and one column
per grade category in a Massar-style export given as raw rows of cell values.
Header labels win; content statistics are the fallback.
"""

__all__ = [
    "find_roster_header_row",
    "roster_headers",
    "find_number_column",
    "find_name_column",
    "find_mark_columns",
    "detect_roster_structure",
    "is_massar_roster",
]

logger = logging.getLogger(__name__)

_ROSTER_NUMBER = re.compile(r"^[GgJj]?\d{7,}$|^\d{1,2}$")


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def find_roster_header_row(rows: Sequence[Sequence[Any]], config: ParserConfig = DEFAULT_CONFIG) -> int:
    for idx in range(min(config.roster_header_scan_rows, len(rows))):
        if any(_is_text(c) and any(k in c for k in config.roster_header_keywords) for c in rows[idx]):
            return idx
    return 0


def roster_headers(rows: Sequence[Sequence[Any]], config: ParserConfig = DEFAULT_CONFIG) -> list[str]:
    if not rows:
        return []
    header = rows[find_roster_header_row(rows, config)]
    return [str(c) if c not in (None, "") else "" for c in header]


def _find_header(headers: list[str], keywords: Sequence[str]) -> int:
    # first keyword in priority order wins, not the leftmost column
    for keyword in keywords:
        for idx, text in enumerate(headers):
            if text and keyword in text:
                return idx
    return NOT_FOUND


def _cell(rows: Sequence[Sequence[Any]], row: int, col: int) -> Any:
    if row < len(rows) and col < len(rows[row]):
        return rows[row][col]
    return None


def find_number_column(rows: Sequence[Sequence[Any]], config: ParserConfig = DEFAULT_CONFIG) -> int:
    headers = roster_headers(rows, config)
    found = _find_header(headers, config.roster_number_keywords)
    if found != NOT_FOUND:
        return found
    for col in range(min(len(headers), 5)):
        hits = 0
        for row in range(1, min(len(rows), 10)):
            value = _cell(rows, row, col)
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
                hits += 1
            elif _is_text(value) and _ROSTER_NUMBER.match(value):
                hits += 1
        if hits > 5:
            return col
    return 0


def find_name_column(rows: Sequence[Sequence[Any]], config: ParserConfig = DEFAULT_CONFIG) -> int:
    headers = roster_headers(rows, config)
    found = _find_header(headers, config.roster_name_keywords)
    if found != NOT_FOUND:
        return found
    native_only = patterns_for(config.script_range).native_only
    for col in range(min(len(headers), 10)):
        hits = sum(
            1
            for row in range(1, min(len(rows), 10))
            if _is_text(_cell(rows, row, col)) and native_only.match(_cell(rows, row, col))
        )
        if hits > 5:
            return col
    return NOT_FOUND


def _as_grade(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        # leading numeric prefix, like parseFloat on spreadsheet text
        match = re.match(r"\s*(\d+(?:\.\d+)?)", value.replace(",", "."))
        return float(match.group(1)) if match else None
    return None


def find_mark_columns(rows: Sequence[Sequence[Any]], config: ParserConfig = DEFAULT_CONFIG) -> dict[str, int]:
    headers = roster_headers(rows, config)
    columns = {m.value: _find_header(headers, config.roster_mark_labels.get(m.value, ())) for m in MARK_ORDER}
    if all(col != NOT_FOUND for col in columns.values()):
        return columns

    start = min(3, max(len(rows) - 1, 0))
    potential: list[int] = []
    for col in range(len(headers)):
        checked = valid = 0
        for row in range(start, min(len(rows), start + 15)):
            value = _cell(rows, row, col)
            if value is None or value == "":
                continue
            checked += 1
            grade = _as_grade(value)
            if grade is not None and config.min_grade <= grade <= config.max_grade:
                valid += 1
        if checked and valid / checked > config.roster_mark_ratio:
            potential.append(col)
    logger.debug(f"roster: potential mark columns {potential}")

    unassigned = [key for key, col in columns.items() if col == NOT_FOUND]
    for key, col in zip(unassigned, potential):
        columns[key] = col
    return columns


def detect_roster_structure(rows: Sequence[Sequence[Any]], config: ParserConfig = DEFAULT_CONFIG) -> RosterStructure:
    structure = RosterStructure(
        header_row_index=find_roster_header_row(rows, config),
        number_column=find_number_column(rows, config),
        name_column=find_name_column(rows, config),
        mark_columns=find_mark_columns(rows, config),
        total_rows=len(rows),
        headers=tuple(roster_headers(rows, config)),
    )
    logger.debug(f"roster: {structure}")
    return structure


def is_massar_roster(rows: Sequence[Sequence[Any]], config: ParserConfig = DEFAULT_CONFIG) -> bool:
    """True when the rows look like a Massar grade export."""
    if len(rows) < config.massar_min_rows:
        return False
    hits = 0
    for row in rows:
        for cell in row:
            if not _is_text(cell):
                continue
            for indicator in config.massar_indicators:
                if indicator in cell:
                    hits += 1
                    if hits >= config.massar_min_indicators:
                        return True
    return False
