from collections import Counter
from pathlib import Path

import numpy as np
import pytest

from features import build_tile, tile_edges
from orientation import ORIENTATIONS, orient_grid
from parsing import parse_tiles
from reconstruct import trim_border

DATA_DIR = Path(__file__).parent / "data"

SAMPLE_CORNERS = [1171, 1951, 2971, 3079]
SAMPLE_CORNER_PRODUCT = 20899048083289
SAMPLE_ROUGHNESS = 273
SAMPLE_LAYOUT = [
    [1951, 2311, 3079],
    [2729, 1427, 2473],
    [2971, 1489, 1171],
]


@pytest.fixture
def sample_text():
    return (DATA_DIR / "sample.txt").read_text()


@pytest.fixture
def sample_tiles(sample_text):
    return parse_tiles(sample_text)


def _seams_are_unique(grids, allowed=()):
    """
    True when no edge is blank, no edge reads the same both ways (unless
    allowed) and no edge appears on more than two tiles.
    """
    seen = Counter()
    for grid in grids:
        for edge in tile_edges(grid):
            canonical = min(edge, edge[::-1])
            if not any(edge):
                return False
            if edge == edge[::-1] and canonical not in allowed:
                return False
            seen[canonical] += 1
    return max(seen.values()) <= 2


def make_puzzle(n, side=24, seed=0, palindrome_seam=False):
    """
    Cut a random bitmap into n x n tiles that share their border rows, then
    rotate/mirror and shuffle them.

    Returns (tiles, truth, cells) where truth is the interior image the tiles
    were cut from and cells maps (row, col) to the unoriented tile grid.
    With palindrome_seam the seam between (0, 0) and (0, 1) reads the same
    in both directions.
    """
    rng = np.random.default_rng(seed)
    step = side - 1
    size = n * step + 1

    while True:
        big = rng.random((size, size)) < 0.5
        allowed = set()
        if palindrome_seam:
            half = rng.random(side // 2) < 0.5
            column = np.concatenate([half, half[::-1]])
            big[0:side, step] = column
            allowed.add(tuple(bool(b) for b in column))

        cells = {
            (i, j): big[i * step:i * step + side, j * step:j * step + side]
            for i in range(n)
            for j in range(n)
        }
        if _seams_are_unique(cells.values(), allowed):
            break

    tiles = []
    for position in rng.permutation(n * n):
        i, j = divmod(int(position), n)
        grid = orient_grid(cells[(i, j)], int(rng.integers(ORIENTATIONS)))
        tiles.append(build_tile(1000 + i * n + j, grid))

    truth = np.vstack([
        np.hstack([trim_border(cells[(i, j)]) for j in range(n)])
        for i in range(n)
    ])
    return tiles, truth, cells


def is_orientation_of(image, truth):
    return any(
        np.array_equal(image, orient_grid(truth, k)) for k in range(ORIENTATIONS)
    )


def assert_edges_match(board, tiles):
    """Every shared edge on a solved board has equal codes on both sides."""
    for r in range(board.rows):
        for c in range(board.cols):
            tile_index, orientation = board.grid[r][c]
            view = tiles[tile_index].views[orientation]
            if c + 1 < board.cols:
                ri, ro = board.grid[r][c + 1]
                assert view[1] == tiles[ri].views[ro][3]
            if r + 1 < board.rows:
                bi, bo = board.grid[r + 1][c]
                assert view[2] == tiles[bi].views[bo][0]
