from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from functools import lru_cache

"""Text normalization primitives shared by the extractors and the matcher.

- normalize_digits: native decimal digits -> ASCII (mandatory pre-pass)
- split_ocr_lines: OCR blob -> trimmed, non-blank, digit-normalized lines
- normalize_name: canonical form for fuzzy name comparison
- patterns_for: compiled regex families for a native script range
"""

__all__ = [
    "normalize_digits",
    "split_ocr_lines",
    "normalize_name",
    "parse_numeric",
    "PatternSet",
    "patterns_for",
]

ARABIC_DECIMAL_SEPARATOR = "٫"

_PLAIN_NUMBER = re.compile(r"^\d+(?:\.\d+)?$")


def normalize_digits(text: str) -> str:
    """Map every Unicode decimal digit to its ASCII equivalent.

    >>> normalize_digits("١٢.٥٠")
    '12.50'
    """
    out: list[str] = []
    for ch in text:
        if ch.isascii():
            out.append(ch)
        elif ch == ARABIC_DECIMAL_SEPARATOR:
            out.append(".")
        elif unicodedata.category(ch) == "Nd":
            out.append(str(unicodedata.decimal(ch)))
        else:
            out.append(ch)
    return "".join(out)


def split_ocr_lines(text: str) -> list[str]:
    lines = (normalize_digits(raw.strip()) for raw in text.splitlines())
    return [line for line in lines if line]


def parse_numeric(text: str) -> float | None:
    """Parse a plain integer/decimal segment, accepting a decimal comma."""
    cleaned = text.replace(",", ".").strip()
    if _PLAIN_NUMBER.match(cleaned):
        return float(cleaned)
    return None


def normalize_name(text: object, allographs: tuple[tuple[str, str], ...] = ()) -> str:
    """Fold a person name for comparison.

    Canonical decomposition, combining marks (harakat, shadda, accents)
    removed, allographic letter variants collapsed, trimmed and lower-cased.
    """
    if text is None:
        return ""
    decomposed = unicodedata.normalize("NFKD", str(text))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    for variant, canonical in allographs:
        stripped = stripped.replace(variant, canonical)
    return stripped.strip().lower()


@dataclass(frozen=True)
class PatternSet:
    """Regex families, parameterized by the native script character range."""
    native_char: re.Pattern[str]
    native_only: re.Pattern[str]
    leading_int: re.Pattern[str]  # "12 ..." (integer followed by whitespace)
    leading_digits: re.Pattern[str]  # "12..." (integer at line start)
    pipe_int: re.Pattern[str]
    decimal_pair: re.Pattern[str]  # 14.50 / 14,50 anywhere
    mark_token: re.Pattern[str]  # standalone 1-2 digit token, optional decimal part
    decimal_mark_token: re.Pattern[str]  # standalone decimal pair only
    numeric_token: re.Pattern[str]  # any integer or decimal run
    column_gap: re.Pattern[str]
    institutional_id: re.Pattern[str]
    bare_id: re.Pattern[str]
    id_with_name: re.Pattern[str]
    bare_int_line: re.Pattern[str]
    digit_run: re.Pattern[str]


@lru_cache(maxsize=8)
def patterns_for(script_range: str) -> PatternSet:
    native = f"[{script_range}]"
    return PatternSet(
        native_char=re.compile(native),
        native_only=re.compile(rf"^[{script_range}\s]+$"),
        leading_int=re.compile(r"^\s*(\d+)\s"),
        leading_digits=re.compile(r"^\d+"),
        pipe_int=re.compile(r"^\|\s*\d+"),
        decimal_pair=re.compile(r"\d{1,2}[.,]\d{2}"),
        mark_token=re.compile(r"\b(\d{1,2}(?:[.,]\d{1,2})?)\b"),
        decimal_mark_token=re.compile(r"\b(\d{1,2}[.,]\d{1,2})\b"),
        numeric_token=re.compile(r"\d+(?:[.,]\d+)?"),
        column_gap=re.compile(r"\s{2,}|\|"),
        institutional_id=re.compile(r"[A-Za-z]?\d{7,}"),
        bare_id=re.compile(r"^\d+$"),
        id_with_name=re.compile(rf"^\s*(\d+)\s*[|\s]*([{script_range}\s]+)"),
        bare_int_line=re.compile(r"^\s*(\d+)\s*$"),
        digit_run=re.compile(r"\d+"),
    )
