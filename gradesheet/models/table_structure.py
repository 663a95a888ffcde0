from __future__ import annotations

from dataclasses import dataclass

from .grid import Grid

"""TableStructure model: classified roles of grid rows and columns."""

__all__ = [
    "TableStructure",
]


@dataclass(frozen=True)
class TableStructure:
    """Result of structure identification over a Grid.

    ``student_id_column``, ``student_name_column`` and every entry of
    ``mark_columns`` are distinct. When the grid is narrower than the number of
    roles, an unresolved role points at ``col_count`` (outside the grid) and
    reads as an empty cell.
    """
    header_row_index: int
    student_id_column: int
    student_name_column: int
    mark_columns: tuple[int, ...]
    grid: Grid

    @property
    def row_count(self) -> int:
        return self.grid.row_count

    @property
    def col_count(self) -> int:
        return self.grid.col_count
