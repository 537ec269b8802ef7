# matching.py
import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Set

from models import PuzzleError, Tile

logger = logging.getLogger(__name__)

# Each unmatched side shows up twice: once per reading direction.
CORNER_UNMATCHED = 4

# edge code -> ids of the tiles showing it in any orientation
EdgeIndex = Dict[int, Set[int]]


def build_edge_index(tiles: Sequence[Tile]) -> EdgeIndex:
    index: EdgeIndex = defaultdict(set)
    for tile in tiles:
        for code in tile.codes():
            index[code].add(tile.id)
    return dict(index)


def unmatched_edges(tiles: Sequence[Tile], index: EdgeIndex = None) -> Dict[int, Set[int]]:
    """
    For every tile id, the edge codes no other tile shares.
    Tiles with no unmatched codes map to an empty set.
    """
    if index is None:
        index = build_edge_index(tiles)

    unmatched: Dict[int, Set[int]] = {tile.id: set() for tile in tiles}
    for code, owners in index.items():
        if len(owners) == 1:
            (owner,) = owners
            unmatched[owner].add(code)
    return unmatched


def find_corners(tiles: Sequence[Tile], index: EdgeIndex = None) -> List[int]:
    """
    Ids of tiles with exactly four unmatched codes, i.e. two open sides.
    A lone tile is its own corner. Sorted for a stable start choice.
    """
    if len(tiles) == 1:
        return [tiles[0].id]

    unmatched = unmatched_edges(tiles, index)
    corners = sorted(tid for tid, codes in unmatched.items() if len(codes) == CORNER_UNMATCHED)
    logger.debug(f"Corner tiles: {corners}")
    return corners


def classify_tiles(tiles: Sequence[Tile], index: EdgeIndex = None) -> Dict[int, str]:
    """Label each tile id as 'corner', 'border' or 'interior'."""
    if len(tiles) == 1:
        return {tiles[0].id: "corner"}

    labels = {}
    for tid, codes in unmatched_edges(tiles, index).items():
        if len(codes) == CORNER_UNMATCHED:
            labels[tid] = "corner"
        elif not codes:
            labels[tid] = "interior"
        else:
            # one open side: two codes, or one if it reads the same both ways
            labels[tid] = "border"
    return labels


def corner_product(tiles: Sequence[Tile], index: EdgeIndex = None) -> int:
    corners = find_corners(tiles, index)
    expected = 1 if len(tiles) == 1 else 4
    if len(corners) != expected:
        raise PuzzleError(f"expected {expected} corner tiles, found {len(corners)}: {corners}")

    product = 1
    for tid in corners:
        product *= tid
    return product
