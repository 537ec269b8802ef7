# models.py
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple
import numpy as np

# A view is the four edge codes of one orientation: [top, right, bottom, left]
View = Tuple[int, int, int, int]


class PuzzleError(Exception):
    """Base class for every failure that ends a run."""


class MalformedTile(PuzzleError):
    def __init__(self, message: str, tile_id: Optional[int] = None):
        if tile_id is not None:
            message = f"tile {tile_id}: {message}"
        super().__init__(message)
        self.tile_id = tile_id


class NonSquareTileCount(PuzzleError):
    def __init__(self, count: int):
        super().__init__(f"{count} tiles cannot form a square arrangement")
        self.count = count


class AmbiguousOrNoMatch(PuzzleError):
    """
    Raised when a cell has zero or several candidate (tile, orientation)
    pairs. The greedy solver never backtracks, so this is terminal.
    """
    def __init__(self, row: int, col: int, candidates: Sequence[Tuple[int, int]]):
        if candidates:
            reason = f"{len(candidates)} candidates {list(candidates)}"
        else:
            reason = "no candidate"
        super().__init__(f"cell ({row}, {col}): {reason}")
        self.row = row
        self.col = col
        self.candidates = list(candidates)


class Tile:
    """
    Represents a single square tile.
    The grid is made read-only; views are computed once by the edge codec.
    """
    def __init__(self, tile_id: int, grid: np.ndarray, views: Sequence[View]):
        self.id: int = tile_id

        self.grid: np.ndarray = np.array(grid, dtype=bool)
        self.grid.flags.writeable = False

        # views[k] = edge codes after applying orientation k
        self.views: Tuple[View, ...] = tuple(tuple(v) for v in views)

    @property
    def side(self) -> int:
        return self.grid.shape[0]

    def codes(self) -> set:
        """Every edge code this tile shows in any orientation."""
        return {code for view in self.views for code in view}

    def __repr__(self) -> str:
        return f"Tile({self.id}, side={self.side})"


class PlacedTile(NamedTuple):
    row: int
    col: int
    tile_index: int
    orientation: int


class Board:
    """
    Represents the final arrangement as a grid of (tile_index, orientation).
    tile_index addresses the list of tiles the board was solved from.
    """
    def __init__(self, rows: int, cols: int):
        self.rows: int = rows
        self.cols: int = cols

        # Each cell: (tile_index, orientation) or None
        self.grid: List[List[Optional[Tuple[int, int]]]] = [
            [None for _ in range(cols)]
            for _ in range(rows)
        ]

    def place_piece(self, row: int, col: int, tile_index: int, orientation: int) -> None:
        self.grid[row][col] = (tile_index, orientation)

    def remove_piece(self, row: int, col: int) -> None:
        self.grid[row][col] = None

    def is_filled(self) -> bool:
        return all(cell is not None for row in self.grid for cell in row)

    def placements(self) -> Iterator[PlacedTile]:
        """Filled cells in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                cell = self.grid[r][c]
                if cell is None:
                    continue
                tile_index, orientation = cell
                yield PlacedTile(r, c, tile_index, orientation)

    def tile_ids(self, tiles: Sequence[Tile]) -> List[List[Optional[int]]]:
        return [
            [None if cell is None else tiles[cell[0]].id for cell in row]
            for row in self.grid
        ]
