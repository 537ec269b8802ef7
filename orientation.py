# orientation.py
"""
The eight symmetries of a square tile.

Orientation k in 0..3 is k counter-clockwise quarter turns; k in 4..7 is a
left/right mirror followed by k - 4 quarter turns. Edge tuples and pixel
grids are both transformed through apply_orientation, so the edge codes of
view k always describe the pixels of orient_grid(grid, k).
"""
from typing import Callable, Tuple, TypeVar
import numpy as np

ROTATIONS = 4
ORIENTATIONS = 8

# Edge index convention: 0=top, 1=right, 2=bottom, 3=left
TOP, RIGHT, BOTTOM, LEFT = range(4)

# Top/bottom are read left->right, left/right top->bottom
Edge = Tuple[bool, ...]
Edges = Tuple[Edge, Edge, Edge, Edge]

T = TypeVar("T")


def apply_orientation(value: T, orientation: int,
                      rotate: Callable[[T], T], flip: Callable[[T], T]) -> T:
    if not 0 <= orientation < ORIENTATIONS:
        raise ValueError(f"orientation must be in 0..{ORIENTATIONS - 1}, got {orientation}")
    if orientation >= ROTATIONS:
        value = flip(value)
    for _ in range(orientation % ROTATIONS):
        value = rotate(value)
    return value


def rotate_edges(edges: Edges) -> Edges:
    """
    Quarter turn counter-clockwise. The right column becomes the top row;
    the old top row ends up on the left, read in the opposite direction.
    """
    top, right, bottom, left = edges
    return (right, bottom[::-1], left, top[::-1])


def flip_edges(edges: Edges) -> Edges:
    """Mirror left/right: rows reverse, left and right columns swap."""
    top, right, bottom, left = edges
    return (top[::-1], left, bottom[::-1], right)


def rotate_grid(grid: np.ndarray) -> np.ndarray:
    return np.rot90(grid)


def flip_grid(grid: np.ndarray) -> np.ndarray:
    return np.fliplr(grid)


def orient_edges(edges: Edges, orientation: int) -> Edges:
    return apply_orientation(edges, orientation, rotate_edges, flip_edges)


def orient_grid(grid: np.ndarray, orientation: int) -> np.ndarray:
    return apply_orientation(grid, orientation, rotate_grid, flip_grid)
