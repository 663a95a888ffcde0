from __future__ import annotations

from dataclasses import dataclass, field, replace

"""Cell / Grid models for OCR table reconstruction.

A Grid is produced once by GridBuilder.build() and is immutable afterwards.
Cells only change position while the builder pads rows to a rectangle.
"""

__all__ = [
    "Cell",
    "Grid",
    "GridBuilder",
]


@dataclass(frozen=True)
class Cell:
    """Single text segment of an OCR line placed in the grid."""
    text: str
    row: int
    col: int
    is_numeric: bool = False
    numeric_value: float | None = None

    @staticmethod
    def empty(row: int, col: int) -> Cell:
        return Cell(text="", row=row, col=col)

    def at(self, row: int, col: int) -> Cell:
        return replace(self, row=row, col=col)


@dataclass(frozen=True)
class Grid:
    """Rectangular grid of cells. Every row has exactly ``col_count`` cells."""
    rows: tuple[tuple[Cell, ...], ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def col_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def is_empty(self) -> bool:
        return not self.rows or self.col_count == 0

    def cell(self, row: int, col: int) -> Cell | None:
        """Return the cell or None when the position is outside the grid."""
        if 0 <= row < self.row_count and 0 <= col < self.col_count:
            return self.rows[row][col]
        return None

    def row_text(self, row: int) -> str:
        return " ".join(c.text for c in self.rows[row])


@dataclass
class GridBuilder:
    """Append-only builder. ``build()`` rectangularizes and renumbers cells."""
    _rows: list[list[Cell]] = field(default_factory=list)

    def add_row(self, cells: list[Cell]) -> None:
        # copy so callers can't alias our row storage
        self._rows.append(list(cells))

    def __len__(self) -> int:
        return len(self._rows)

    def build(self) -> Grid:
        if not self._rows:
            return Grid()
        width = max(len(r) for r in self._rows)
        out: list[tuple[Cell, ...]] = []
        for r_idx, row in enumerate(self._rows):
            cells = [c.at(r_idx, c_idx) for c_idx, c in enumerate(row)]
            cells.extend(Cell.empty(r_idx, c_idx) for c_idx in range(len(row), width))
            out.append(tuple(cells))
        return Grid(rows=tuple(out))
