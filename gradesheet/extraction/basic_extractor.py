from __future__ import annotations

import logging

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..models.student_record import StudentMarks, StudentRecord
from ..text.normalize import patterns_for

"""Basic line-oriented extraction (last resort): one student per numbered line."""

__all__ = [
    "extract_basic",
]

logger = logging.getLogger(__name__)


def extract_basic(lines: list[str], config: ParserConfig = DEFAULT_CONFIG) -> list[StudentRecord]:
    pats = patterns_for(config.script_range)
    records: list[StudentRecord] = []
    selected = [line for line in lines if pats.leading_int.match(line)]

    for idx, line in enumerate(selected):
        head = pats.leading_int.match(line)
        number = int(head.group(1))

        name = pats.numeric_token.sub("", line).strip()
        if len(name) < config.min_name_length and idx + 1 < len(selected):
            # only the next numbered line is a candidate, never unnumbered text
            following = selected[idx + 1]
            if not pats.leading_int.match(following):
                name = following.strip()
        if len(name) < config.min_name_length:
            name = config.placeholder_name.format(number=number)

        values: list[float | None] = []
        for token in pats.decimal_mark_token.findall(line):
            value = float(token.replace(",", "."))
            if config.min_grade <= value <= config.max_grade:
                values.append(value)
        marks = StudentMarks.from_values(values, config.min_grade, config.max_grade)

        records.append(StudentRecord(number=number, name=name, marks=marks))

    logger.debug(f"basic: {len(records)} students extracted")
    return records
