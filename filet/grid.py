"""Grid data structures for filet crochet patterns.

A filet pattern is a rectangular matrix of cells. Each cell is either
a solid block (filled stitches) or an open mesh space. One digit's
glyph and the combined pattern for a whole digit string share the
same representation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

# Tags attached to every composed pattern after the digit string itself
PATTERN_TAGS = ("combined", "filet", "crochet", "pattern")


class Cell(str, Enum):
    """State of a single filet cell.

    The values are the symbols used when patterns are stored as JSON.
    """

    SOLID = "█"
    OPEN = "░"


def _to_cell(value: object) -> Cell:
    """Anything that is not explicitly solid reads as open mesh."""
    if value is True or value == Cell.SOLID.value:
        return Cell.SOLID
    return Cell.OPEN


@dataclass(frozen=True)
class GlyphGrid:
    """Immutable rectangular matrix of cells.

    Attributes:
        cells: Rows of cells, top row first.

    Raises:
        ValueError: If the grid is empty or its rows differ in length.
    """

    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise ValueError("Grid must be at least 1x1")
        width = len(self.cells[0])
        for index, row in enumerate(self.cells):
            if len(row) != width:
                raise ValueError(f"Row {index} has {len(row)} cells, expected {width}")

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Iterable[object]],
        width: int | None = None,
        height: int | None = None,
    ) -> GlyphGrid:
        """Build a grid from loosely-typed rows.

        Rows may be strings of symbols, lists of symbols or lists of
        booleans. Short rows are padded with open cells. When ``width``
        or ``height`` is given it wins over the shape of ``rows``:
        missing cells are open and extra cells are dropped.

        Args:
            rows: Source rows, top row first.
            width: Declared column count, or None to use the widest row.
            height: Declared row count, or None to use the row count.

        Returns:
            A rectangular GlyphGrid.

        Raises:
            ValueError: If the resulting grid would be empty.
        """
        source = [[_to_cell(value) for value in row] for row in rows]
        target_width = width if width is not None else max((len(r) for r in source), default=0)
        target_height = height if height is not None else len(source)
        if target_width < 1 or target_height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {target_width}x{target_height}")

        cells = []
        for r in range(target_height):
            row = source[r] if r < len(source) else []
            cells.append(
                tuple(row[c] if c < len(row) else Cell.OPEN for c in range(target_width))
            )
        return cls(cells=tuple(cells))

    @property
    def width(self) -> int:
        return len(self.cells[0])

    @property
    def height(self) -> int:
        return len(self.cells)

    def cell_at(self, row: int, col: int) -> Cell:
        """Return the cell at (row, col); out-of-range reads are open."""
        if 0 <= row < self.height and 0 <= col < self.width:
            return self.cells[row][col]
        return Cell.OPEN

    def solid_count(self) -> int:
        """Count solid cells in the grid."""
        return sum(1 for row in self.cells for cell in row if cell is Cell.SOLID)

    def to_rows(self) -> list[list[str]]:
        """Rows of stored symbols, suitable for JSON."""
        return [[cell.value for cell in row] for row in self.cells]

    def to_text(self) -> str:
        """Multi-line text picture of the grid."""
        return "\n".join("".join(cell.value for cell in row) for row in self.cells)


@dataclass(frozen=True)
class ComposedPattern:
    """Result of composing a digit string into a single grid.

    Attributes:
        grid: Combined, gauge-scaled grid.
        total_width: Column count of the combined grid.
        total_height: Row count of the combined grid.
        source_digits: Digit string the pattern was built from.
    """

    grid: GlyphGrid
    total_width: int
    total_height: int
    source_digits: str

    @property
    def alt_text(self) -> str:
        return f'Filet crochet pattern for "{self.source_digits}"'

    @property
    def tags(self) -> list[str]:
        """Digit string, the fixed pattern tags, then each distinct digit."""
        tags = [self.source_digits, *PATTERN_TAGS]
        for digit in self.source_digits:
            if digit not in tags:
                tags.append(digit)
        return tags
