from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""StudentRecord model: one recovered student with up to four grade slots.

Grades are on the Moroccan 0-20 scale. Extractors only construct StudentMarks
through ``StudentMarks.from_values`` which drops anything outside the bounds,
so a non-null slot is always a valid grade.
"""

__all__ = [
    "MarkType",
    "StudentMarks",
    "StudentRecord",
]


class MarkType(str, Enum):
    """Closed set of grade categories, in sheet column order."""
    FARD1 = "fard1"
    FARD2 = "fard2"
    FARD3 = "fard3"
    ACTIVITIES = "activities"


MARK_ORDER: tuple[MarkType, ...] = (
    MarkType.FARD1,
    MarkType.FARD2,
    MarkType.FARD3,
    MarkType.ACTIVITIES,
)


@dataclass(frozen=True)
class StudentMarks:
    fard1: float | None = None
    fard2: float | None = None
    fard3: float | None = None
    activities: float | None = None

    @staticmethod
    def from_values(
        values: list[float | None], min_grade: float = 0.0, max_grade: float = 20.0
    ) -> StudentMarks:
        """Assign values positionally to fard1..activities.

        Values beyond the fourth are discarded; out-of-range values leave
        their slot empty.
        """
        slots: list[float | None] = [None, None, None, None]
        for idx, value in enumerate(values[: len(MARK_ORDER)]):
            if value is not None and min_grade <= value <= max_grade:
                slots[idx] = value
        return StudentMarks(*slots)

    def get(self, mark_type: MarkType) -> float | None:
        return getattr(self, mark_type.value)

    def as_dict(self) -> dict[str, float | None]:
        return {m.value: self.get(m) for m in MARK_ORDER}


@dataclass(frozen=True)
class StudentRecord:
    """One student row recovered from OCR text.

    ``number`` is whatever identifier the document carried (row number or
    institutional id digits); it is neither unique nor validated.
    """
    number: int
    name: str
    marks: StudentMarks = StudentMarks()

    def as_dict(self) -> dict[str, object]:
        return {"number": self.number, "name": self.name, "marks": self.marks.as_dict()}
