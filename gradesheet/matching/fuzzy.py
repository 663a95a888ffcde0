from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.match_result import NOT_FOUND, MatchResult
from ..text.normalize import normalize_digits, normalize_name

"""Fuzzy matching of recovered students against a roster.

The roster is a list of raw rows (row 0 is the header). Lookup order:

1. id: digits-only comparison (any script, folded to ASCII), one value must
   be a suffix of the other
   (institutional ids carry prefixes / padding the OCR copy may lack)
2. name: normalized edit-distance similarity above a fixed threshold

Both scans are top-down and return the first acceptable row.
"""

__all__ = [
    "levenshtein",
    "name_similarity",
    "find_row_by_number",
    "find_row_by_name",
    "match_student",
]

logger = logging.getLogger(__name__)

_NON_DIGIT = re.compile(r"[^0-9]")


def levenshtein(s1: str, s2: str) -> int:
    """Exact edit distance, single rolling row of min(len) + 1 costs."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    costs = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        diagonal = costs[0]
        costs[0] = i
        for j, c2 in enumerate(s2, start=1):
            above = costs[j]
            if c1 == c2:
                costs[j] = diagonal
            else:
                costs[j] = min(diagonal, above, costs[j - 1]) + 1
            diagonal = above
    return costs[-1]


def name_similarity(s1: str, s2: str, containment_score: float = 0.9) -> float:
    """Similarity of two already-normalized names in [0, 1]."""
    if s1 == s2:
        return 1.0
    longer, shorter = (s1, s2) if len(s1) > len(s2) else (s2, s1)
    if not longer:
        return 1.0
    if shorter in longer:
        return containment_score
    return (len(longer) - levenshtein(longer, shorter)) / len(longer)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # spreadsheets hand numeric ids back as floats
        return str(int(value))
    return str(value)


def _digits(value: Any) -> str:
    return _NON_DIGIT.sub("", normalize_digits(_cell_text(value)))


def find_row_by_number(number: Any, rows: Sequence[Sequence[Any]], id_column: int) -> int:
    """First roster row whose id digits suffix-match ``number``, else NOT_FOUND."""
    target = _digits(number)
    if not target or id_column < 0:
        return NOT_FOUND
    for idx in range(1, len(rows)):
        row = rows[idx]
        if id_column >= len(row):
            continue
        candidate = _digits(row[id_column])
        if not candidate:
            continue
        if candidate.endswith(target) or target.endswith(candidate):
            return idx
    return NOT_FOUND


def _scan_names(
    name: Any, rows: Sequence[Sequence[Any]], name_column: int, config: ParserConfig
) -> tuple[int, float | None]:
    target = normalize_name(name, config.allograph_map)
    if not target or name_column < 0:
        return NOT_FOUND, None
    for idx in range(1, len(rows)):
        row = rows[idx]
        if name_column >= len(row):
            continue
        candidate = normalize_name(row[name_column], config.allograph_map)
        if not candidate:
            continue
        score = name_similarity(target, candidate, config.containment_score)
        if score > config.name_similarity_threshold:
            return idx, score
    return NOT_FOUND, None


def find_row_by_name(
    name: Any, rows: Sequence[Sequence[Any]], name_column: int, config: ParserConfig = DEFAULT_CONFIG
) -> int:
    """First roster row whose name is similar enough to ``name``, else NOT_FOUND."""
    return _scan_names(name, rows, name_column, config)[0]


def match_student(
    number: Any,
    name: Any,
    rows: Sequence[Sequence[Any]],
    id_column: int,
    name_column: int,
    config: ParserConfig = DEFAULT_CONFIG,
) -> MatchResult:
    """Locate a student in the roster: id first, then name."""
    row = find_row_by_number(number, rows, id_column)
    if row != NOT_FOUND:
        return MatchResult(row_index=row, method="id")
    row, score = _scan_names(name, rows, name_column, config)
    if row != NOT_FOUND:
        return MatchResult(row_index=row, method="name", score=score)
    logger.debug(f"match: no roster row for number={number!r} name={name!r}")
    return MatchResult.not_found()
