# reconstruct.py
import logging
from typing import Sequence

import numpy as np

from models import Board, PuzzleError, Tile
from orientation import orient_grid

logger = logging.getLogger(__name__)


def trim_border(grid: np.ndarray) -> np.ndarray:
    """Drop the outermost ring of pixels; those are the matched edges."""
    return grid[1:-1, 1:-1]


def oriented_interior(tile: Tile, orientation: int) -> np.ndarray:
    return orient_grid(trim_border(tile.grid), orientation)


def assemble_image(board: Board, tiles: Sequence[Tile]) -> np.ndarray:
    """
    Stitch the trimmed, oriented tiles of a solved board into one bitmap of
    side rows * (tile side - 2). The result is read-only.
    """
    if not board.is_filled():
        raise PuzzleError("cannot assemble an incomplete board")

    rows = []
    for r in range(board.rows):
        row_tiles = []
        for c in range(board.cols):
            tile_index, orientation = board.grid[r][c]
            row_tiles.append(oriented_interior(tiles[tile_index], orientation))
        rows.append(np.hstack(row_tiles))

    image = np.ascontiguousarray(np.vstack(rows), dtype=bool)
    image.flags.writeable = False
    logger.info(f"Assembled image: {image.shape[0]}x{image.shape[1]}, {int(image.sum())} set pixels")
    return image
