from __future__ import annotations

import logging

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.student_record import MARK_ORDER, StudentMarks, StudentRecord
from ..text.normalize import patterns_for

"""Pattern-based extraction (second strategy, grid independent).

Works directly on the OCR lines in three independent stages:

- isolate the student list between a header line and a footer line
- pull (id, name) pairs out of that section with a few line patterns
- harvest every grade-looking token from the whole document

and then hands the harvested grades out to the students in reading order,
a fixed number per student. The distribution is best effort: it is only right
when OCR emits grades in the same order as the students.
"""

__all__ = [
    "find_student_section",
    "extract_student_info",
    "harvest_marks",
    "distribute_marks",
    "extract_by_patterns",
]

logger = logging.getLogger(__name__)


def _is_section_header(line: str, config: ParserConfig) -> bool:
    text = line.lower()
    if any(phrase in text for phrase in config.section_header_phrases):
        return True
    return any(first in text and second in text for first, second in config.section_header_pairs)


def find_student_section(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> list[str] | None:
    """Slice of ``lines`` holding the student list, or None if no start line."""
    pats = patterns_for(config.script_range)
    start = next((i for i, line in enumerate(lines) if _is_section_header(line, config)), None)
    if start is None:
        start = next((i for i, line in enumerate(lines) if pats.leading_int.match(line)), None)
    if start is None:
        return None

    end = len(lines)
    for idx in range(start + 1, len(lines)):
        line = lines[idx]
        if any(kw in line for kw in config.footer_keywords):
            end = idx
            break
        if (
            idx > start + config.min_section_rows
            and not line.strip()
            and idx + 1 < len(lines)
            and not lines[idx + 1].strip()
        ):
            end = idx
            break
    return lines[start:end]


def extract_student_info(section: list[str], config: ParserConfig = DEFAULT_CONFIG) -> dict[str, str]:
    """Map of student id (digit string) -> name. Later duplicates win."""
    pats = patterns_for(config.script_range)
    info: dict[str, str] = {}
    idx = 0
    while idx < len(section):
        line = section[idx].strip()
        if _is_section_header(line, config):
            idx += 1
            continue

        inline = pats.id_with_name.match(line)
        bare = pats.bare_int_line.match(line)
        if inline and inline.group(2).strip():
            info[inline.group(1)] = inline.group(2).strip()
        elif bare:
            student_id = bare.group(1)
            following = section[idx + 1].strip() if idx + 1 < len(section) else ""
            if following and pats.native_only.match(following):
                info[student_id] = following
                idx += 1  # name line consumed
            else:
                info[student_id] = config.placeholder_name.format(number=student_id)
        elif pats.native_char.search(line):
            numbers = pats.digit_run.findall(line)
            if numbers:
                name = pats.digit_run.sub("", line).strip()
                if len(name) > 2:
                    info[numbers[0]] = name
        idx += 1
    return info


def harvest_marks(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> list[float]:
    """Every standalone grade-range token of the document, in reading order."""
    pats = patterns_for(config.script_range)
    values: list[float] = []
    for line in lines:
        if any(kw in line for kw in config.metadata_keywords):
            continue
        for token in pats.mark_token.findall(line):
            value = float(token.replace(",", "."))
            if config.min_grade <= value <= config.max_grade:
                values.append(value)
    return values


def distribute_marks(
    info: dict[str, str], marks: list[float], config: ParserConfig = DEFAULT_CONFIG
) -> list[StudentRecord]:
    if not info:
        return []
    entries = sorted(((int(sid), name) for sid, name in info.items()), key=lambda e: e[0])
    per_student = min(len(MARK_ORDER), len(marks) // len(entries))

    records: list[StudentRecord] = []
    cursor = 0
    for number, name in entries:
        chunk = marks[cursor : cursor + per_student]
        cursor += len(chunk)
        values: list[float | None] = list(chunk)
        records.append(
            StudentRecord(
                number=number,
                name=name,
                marks=StudentMarks.from_values(values, config.min_grade, config.max_grade),
            )
        )
    return records


def extract_by_patterns(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> list[StudentRecord]:
    section = find_student_section(lines, config)
    if section is None:
        logger.debug("patterns: no student section found")
        return []
    info = extract_student_info(section, config)
    if not info:
        logger.debug("patterns: no student info in section")
        return []
    marks = harvest_marks(lines, config)
    logger.debug(f"patterns: {len(info)} students, {len(marks)} harvested marks")
    return distribute_marks(info, marks, config)
