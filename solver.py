# solver.py
import logging
import math
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from matching import EdgeIndex, build_edge_index, find_corners
from models import AmbiguousOrNoMatch, Board, NonSquareTileCount, PuzzleError, Tile
from orientation import BOTTOM, LEFT, ORIENTATIONS, RIGHT, TOP

logger = logging.getLogger(__name__)

# Neighbor directions for grid
# For each cell we care about constraints from above and from the left
ABOVE = (-1, 0)
BEFORE = (0, -1)

# (neighbor relative position) -> (neighbor edge, current edge)
NEIGHBOR_EDGE_MAP = {
    BEFORE: (RIGHT, LEFT),  # neighbor's right edge vs current left edge
    ABOVE: (BOTTOM, TOP),   # neighbor's bottom edge vs current top edge
}

# (tile_index, orientation)
Candidate = Tuple[int, int]


def puzzle_size(tiles: Sequence[Tile]) -> int:
    """Side of the square arrangement; the tile count must be a perfect square."""
    side = math.isqrt(len(tiles))
    if side == 0 or side * side != len(tiles):
        raise NonSquareTileCount(len(tiles))
    return side


def compute_cell_order(rows: int, cols: int) -> List[Tuple[int, int]]:
    """
    Return an ordered list of (row, col) positions to fill.
    Row-major, so the left and top neighbors are always placed first.
    """
    order = []
    for r in range(rows):
        for c in range(cols):
            order.append((r, c))
    return order


def starting_orientations(tile: Tile, tiles: Sequence[Tile], index: EdgeIndex = None) -> List[int]:
    """
    Orientations of a corner tile whose right and bottom edges are both shared
    with some other tile, so its open sides face up and left.
    A lone tile keeps orientation 0.
    """
    if len(tiles) == 1:
        return [0]
    if index is None:
        index = build_edge_index(tiles)

    def shared(code: int) -> bool:
        return bool(index.get(code, set()) - {tile.id})

    return [
        oid for oid in range(ORIENTATIONS)
        if shared(tile.views[oid][RIGHT]) and shared(tile.views[oid][BOTTOM])
    ]


def starting_orientation(tile: Tile, tiles: Sequence[Tile], index: EdgeIndex = None) -> int:
    options = starting_orientations(tile, tiles, index)
    if not options:
        raise AmbiguousOrNoMatch(0, 0, [])
    return options[0]


def required_codes(board: Board, tiles: Sequence[Tile], row: int, col: int) -> Dict[int, int]:
    """
    Edge codes the tile at (row, col) must show, keyed by its edge index,
    taken from the already placed left and top neighbors.
    """
    required: Dict[int, int] = {}

    for (drow, dcol), (neigh_edge, cur_edge) in NEIGHBOR_EDGE_MAP.items():
        nr, nc = row + drow, col + dcol
        if nr < 0 or nc < 0:
            continue

        neighbor = board.grid[nr][nc]
        if neighbor is None:
            continue

        neigh_index, neigh_orientation = neighbor
        required[cur_edge] = tiles[neigh_index].views[neigh_orientation][neigh_edge]

    return required


def find_candidates(
    tiles: Sequence[Tile],
    available: Set[int],
    required: Dict[int, int]
) -> List[Candidate]:
    """Every (tile_index, orientation) in the pool showing all required codes."""
    candidates: List[Candidate] = []

    for tile_index in sorted(available):
        views = tiles[tile_index].views
        for orientation in range(ORIENTATIONS):
            view = views[orientation]
            if all(view[edge] == code for edge, code in required.items()):
                candidates.append((tile_index, orientation))

    return candidates


def _start_index(tiles: Sequence[Tile], index: EdgeIndex, start: Optional[int]) -> int:
    corners = find_corners(tiles, index)
    if not corners:
        raise PuzzleError("no corner tile found")

    if start is None:
        start = corners[0]
    elif start not in corners:
        raise PuzzleError(f"tile {start} is not a corner tile (corners: {corners})")

    for i, tile in enumerate(tiles):
        if tile.id == start:
            return i
    raise PuzzleError(f"unknown tile id {start}")


def solve_greedy(tiles: Sequence[Tile], start_index: int, index: EdgeIndex) -> Board:
    """
    Fill the grid in row-major order, taking the single tile and orientation
    that fits each cell. Any cell with zero or several fits raises.
    """
    side = puzzle_size(tiles)
    board = Board(side, side)
    available: Set[int] = set(range(len(tiles)))

    orientation = starting_orientation(tiles[start_index], tiles, index)
    board.place_piece(0, 0, start_index, orientation)
    available.remove(start_index)
    logger.debug(f"(0, 0) <- tile {tiles[start_index].id} orientation {orientation}")

    for r, c in compute_cell_order(side, side)[1:]:
        required = required_codes(board, tiles, r, c)
        candidates = find_candidates(tiles, available, required)
        if len(candidates) != 1:
            raise AmbiguousOrNoMatch(r, c, candidates)

        tile_index, orientation = candidates[0]
        board.place_piece(r, c, tile_index, orientation)
        available.remove(tile_index)
        logger.debug(f"({r}, {c}) <- tile {tiles[tile_index].id} orientation {orientation}")

    return board


def solve_backtracking(tiles: Sequence[Tile], start_index: int, index: EdgeIndex) -> Board:
    """
    Depth-first search over every fitting candidate, for inputs where the
    greedy choice is not unique. Returns the first complete board.

    The search keeps one candidate iterator per filled cell on an explicit
    stack, so board size is not bounded by the interpreter's recursion limit.
    """
    side = puzzle_size(tiles)
    board = Board(side, side)
    available: Set[int] = set(range(len(tiles)))
    order = compute_cell_order(side, side)
    deepest = 0

    start_candidates = [
        (start_index, o)
        for o in starting_orientations(tiles[start_index], tiles, index)
    ]
    stack: List[Iterator[Candidate]] = [iter(start_candidates)]

    while stack:
        idx = len(stack) - 1
        r, c = order[idx]

        # Undo the previous try at this cell
        placed = board.grid[r][c]
        if placed is not None:
            board.remove_piece(r, c)
            available.add(placed[0])

        candidate = next(stack[-1], None)
        if candidate is None:
            stack.pop()
            continue

        # Place tile
        tile_index, orientation = candidate
        board.place_piece(r, c, tile_index, orientation)
        available.remove(tile_index)

        if idx + 1 == len(order):
            return board  # all cells filled

        deepest = max(deepest, idx + 1)
        nr, nc = order[idx + 1]
        stack.append(iter(find_candidates(tiles, available, required_codes(board, tiles, nr, nc))))

    r, c = order[deepest]
    raise AmbiguousOrNoMatch(r, c, [])


def solve_puzzle(
    tiles: Sequence[Tile],
    start: Optional[int] = None,
    exhaustive: bool = False
) -> Board:
    """
    Arrange the tiles on a square board so every shared edge matches.

    start names the corner tile placed at (0, 0); defaults to the lowest corner id.
    With exhaustive=True an ambiguous or dead-end greedy pass is retried as a
    backtracking search instead of raising.
    """
    side = puzzle_size(tiles)
    index = build_edge_index(tiles)
    start_index = _start_index(tiles, index, start)
    logger.info(f"Solving {side}x{side} board from corner tile {tiles[start_index].id}")

    try:
        return solve_greedy(tiles, start_index, index)
    except AmbiguousOrNoMatch as err:
        if not exhaustive:
            raise
        logger.info(f"Greedy placement stopped: {err}; falling back to backtracking")
        return solve_backtracking(tiles, start_index, index)
