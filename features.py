# features.py
from typing import List
import numpy as np

from models import MalformedTile, Tile, View
from orientation import ORIENTATIONS, Edge, Edges, orient_edges

# Edge index convention: 0=top, 1=right, 2=bottom, 3=left


def validate_grid(grid: np.ndarray, tile_id: int = None) -> np.ndarray:
    grid = np.asarray(grid, dtype=bool)
    if grid.ndim != 2:
        raise MalformedTile(f"grid must be 2D, got {grid.ndim}D", tile_id)
    h, w = grid.shape
    if h != w:
        raise MalformedTile(f"grid must be square, got {h}x{w}", tile_id)
    if h < 2:
        raise MalformedTile(f"grid side must be at least 2, got {h}", tile_id)
    return grid


def extract_edge(grid: np.ndarray, edge_index: int) -> Edge:
    """
    Read one boundary of the grid as a tuple of bits.
    Top and bottom are read left to right, left and right top to bottom.
    """
    if edge_index == 0:  # top
        strip = grid[0, :]
    elif edge_index == 1:  # right
        strip = grid[:, -1]
    elif edge_index == 2:  # bottom
        strip = grid[-1, :]
    else:  # left
        strip = grid[:, 0]

    return tuple(bool(b) for b in strip)


def tile_edges(grid: np.ndarray) -> Edges:
    return tuple(extract_edge(grid, edge_index) for edge_index in range(4))


def edge_code(bits: Edge) -> int:
    """Big-endian unsigned integer of an edge: the first cell is the high bit."""
    code = 0
    for bit in bits:
        code = (code << 1) | int(bit)
    return code


def view_codes(edges: Edges) -> View:
    return tuple(edge_code(e) for e in edges)


def compute_views(grid: np.ndarray) -> List[View]:
    """
    Edge codes of all eight orientations of a tile.
    views[k] = [top, right, bottom, left] after orientation k.
    """
    edges = tile_edges(grid)
    return [view_codes(orient_edges(edges, k)) for k in range(ORIENTATIONS)]


def build_tile(tile_id: int, grid: np.ndarray) -> Tile:
    grid = validate_grid(grid, tile_id)
    return Tile(tile_id, grid, compute_views(grid))
