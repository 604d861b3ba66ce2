"""Galaxy map management for Star Traders."""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ..core.enums import CellType
from ..core.exceptions import InvalidMoveError
from ..core.constants import MAX_X, MAX_Y, STAR_RATIO, MAX_COMPANIES, CELL_SYMBOLS, COMPANY_LETTERS
from ..core.random_stream import RandomStream

Coordinate = Tuple[int, int]


def is_company(value: int) -> bool:
    """Check if a cell value is a company id."""
    return 0 <= value < MAX_COMPANIES


@dataclass(frozen=True)
class Neighbors:
    """Values of the four orthogonal neighbours of a cell."""

    left: int
    right: int
    up: int
    down: int

    def values(self) -> Tuple[int, int, int, int]:
        """Neighbour values in left, right, up, down order."""
        return (self.left, self.right, self.up, self.down)

    @property
    def all_empty(self) -> bool:
        return all(v == CellType.EMPTY for v in self.values())

    @property
    def any_company(self) -> bool:
        return any(is_company(v) for v in self.values())

    def first_company(self) -> Optional[int]:
        """First company id in left, right, up, down order."""
        for value in self.values():
            if is_company(value):
                return value
        return None

    def count(self, cell_type: CellType) -> int:
        return sum(1 for v in self.values() if v == cell_type)


class GalaxyMap:
    """Fixed-size grid of cell values, indexed as ``cells[x, y]``.

    Cells hold a ``CellType`` value or, for company territory, the company
    id. Off-grid positions read as empty space.
    """

    def __init__(self, width: int = MAX_X, height: int = MAX_Y):
        self.width = width
        self.height = height
        self.cells = np.full((width, height), int(CellType.EMPTY), dtype=np.int8)

    @classmethod
    def generate(cls, rng: RandomStream, width: int = MAX_X, height: int = MAX_Y,
                 star_ratio: float = STAR_RATIO) -> "GalaxyMap":
        """Create a map with stars scattered at random.

        One float is drawn per cell, column by column.
        """
        galaxy = cls(width, height)
        for x in range(width):
            for y in range(height):
                if rng.uniform_float_01() < star_ratio:
                    galaxy.cells[x, y] = int(CellType.STAR)
        return galaxy

    @classmethod
    def from_rows(cls, rows: List[str]) -> "GalaxyMap":
        """Build a map from text rows using the symbols of ``render_text``."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        galaxy = cls(width, height)
        symbol_to_value = {symbol: int(cell) for cell, symbol in CELL_SYMBOLS.items()}
        for i, letter in enumerate(COMPANY_LETTERS):
            symbol_to_value[letter] = i

        for y, row in enumerate(rows):
            if len(row) != width:
                raise InvalidMoveError(f"Row {y} has length {len(row)}, expected {width}")
            for x, symbol in enumerate(row):
                if symbol not in symbol_to_value:
                    raise InvalidMoveError(f"Unknown map symbol {symbol!r} at ({x}, {y})")
                galaxy.cells[x, y] = symbol_to_value[symbol]
        return galaxy

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        """Cell value at (x, y); off-grid reads as empty."""
        if not self.in_bounds(x, y):
            return int(CellType.EMPTY)
        return int(self.cells[x, y])

    def set(self, x: int, y: int, value: int) -> None:
        if not self.in_bounds(x, y):
            raise InvalidMoveError(
                f"Coordinate ({x}, {y}) is off the map",
                error_code="OFF_MAP",
                context={"x": x, "y": y, "width": self.width, "height": self.height}
            )
        self.cells[x, y] = int(value)

    def neighbors(self, x: int, y: int) -> Neighbors:
        return Neighbors(
            left=self.get(x - 1, y),
            right=self.get(x + 1, y),
            up=self.get(x, y - 1),
            down=self.get(x, y + 1),
        )

    def neighbor_coordinates(self, x: int, y: int) -> List[Coordinate]:
        """Neighbour coordinates in left, right, up, down order (may be off-grid)."""
        return [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]

    def is_empty(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[x, y] == int(CellType.EMPTY)

    def count_empty(self) -> int:
        return int(np.count_nonzero(self.cells == int(CellType.EMPTY)))

    def count_company_cells(self, company_id: int) -> int:
        return int(np.count_nonzero(self.cells == company_id))

    def company_ids_on_map(self) -> List[int]:
        """Distinct company ids that occupy at least one cell."""
        values = np.unique(self.cells)
        return [int(v) for v in values if is_company(int(v))]

    def relabel(self, old_value: int, new_value: int) -> int:
        """Rewrite every cell holding ``old_value``. Returns the count."""
        mask = self.cells == old_value
        changed = int(np.count_nonzero(mask))
        self.cells[mask] = int(new_value)
        return changed

    def clear_company(self, company_id: int) -> int:
        """Return every cell of a company to empty space."""
        return self.relabel(company_id, int(CellType.EMPTY))

    def iter_cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (x, y, value) column by column."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y, int(self.cells[x, y])

    def symbol_at(self, x: int, y: int) -> str:
        value = self.get(x, y)
        if is_company(value):
            return COMPANY_LETTERS[value]
        return CELL_SYMBOLS[CellType(value)]

    def to_rows(self) -> List[str]:
        """Map as text rows, top row first."""
        return [
            "".join(self.symbol_at(x, y) for x in range(self.width))
            for y in range(self.height)
        ]

    def __str__(self) -> str:
        return "\n".join(self.to_rows())
