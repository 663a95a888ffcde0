"""Domain models for the OCR grade-sheet parser.

Value objects only: nothing in this package holds state across parser calls.
"""

from .config_models import DEFAULT_CONFIG, ParserConfig
from .grid import Cell, Grid, GridBuilder
from .match_result import NOT_FOUND, CellWrite, InsertionPlan, MatchResult, RosterStructure
from .miss_record import MissRecord
from .processing_result import BatchResult, DocumentStat
from .student_record import MarkType, StudentMarks, StudentRecord
from .table_structure import TableStructure

__all__ = [
    # Configuration
    "DEFAULT_CONFIG",
    "ParserConfig",
    # Grid / table
    "Cell",
    "Grid",
    "GridBuilder",
    "TableStructure",
    # Records
    "MarkType",
    "StudentMarks",
    "StudentRecord",
    # Matching
    "NOT_FOUND",
    "MatchResult",
    "RosterStructure",
    "CellWrite",
    "InsertionPlan",
    # Reporting
    "MissRecord",
    "BatchResult",
    "DocumentStat",
]
