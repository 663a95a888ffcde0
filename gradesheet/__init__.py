"""OCR grade-sheet parsing.

Turns the raw OCR text of a printed grade sheet into student records and
matches them against a roster.

    >>> from gradesheet import extract_students
    >>> [r.number for r in extract_students("1 أحمد 15.50 12.00")]
    [1]
"""

from .matching.fuzzy import levenshtein, match_student
from .models import MarkType, StudentMarks, StudentRecord
from .services.pipeline import ExtractionPipeline, PipelineState, detect_table, extract_students
from .text.normalize import normalize_digits

__version__ = "0.1.0"

__all__ = [
    "ExtractionPipeline",
    "PipelineState",
    "MarkType",
    "StudentMarks",
    "StudentRecord",
    "detect_table",
    "extract_students",
    "levenshtein",
    "match_student",
    "normalize_digits",
]
