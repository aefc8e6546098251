"""
Editable grid holding extracted table data.
"""
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from .schemas import TableData

Row = Tuple[str, ...]


@dataclass(frozen=True)
class GridModel:
    """
    Immutable table of cell strings. Row 0 is the header row.

    Edits return a new grid: untouched rows are shared between snapshots,
    the edited row is rebuilt. Rows may differ in length.
    """
    rows: Tuple[Row, ...] = ()

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "GridModel":
        return cls(rows=tuple(tuple(row) for row in rows))

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def headers(self) -> Row:
        return self.rows[0] if self.rows else ()

    @property
    def data_rows(self) -> Tuple[Row, ...]:
        return self.rows[1:]

    @property
    def width(self) -> int:
        """Length of the longest row."""
        return max((len(row) for row in self.rows), default=0)

    def cell(self, row: int, col: int) -> str:
        self._check_bounds(row, col)
        return self.rows[row][col]

    def set_cell(self, row: int, col: int, value: str) -> "GridModel":
        """
        Return a copy of the grid with a single cell replaced.

        The grid is never extended: row and col must address an existing cell.

        Raises:
            IndexError: row or col is outside the current grid.
        """
        self._check_bounds(row, col)
        target = self.rows[row]
        new_row = target[:col] + (value,) + target[col + 1:]
        return GridModel(rows=self.rows[:row] + (new_row,) + self.rows[row + 1:])

    def to_list(self) -> TableData:
        """Fresh nested lists, safe for the caller to mutate."""
        return [list(row) for row in self.rows]

    def _check_bounds(self, row: int, col: int) -> None:
        if not 0 <= row < len(self.rows):
            raise IndexError(f"Row {row} out of range for grid with {len(self.rows)} rows")
        if not 0 <= col < len(self.rows[row]):
            raise IndexError(f"Column {col} out of range for row {row} with {len(self.rows[row])} cells")
