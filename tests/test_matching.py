from collections import Counter

import pytest

from conftest import SAMPLE_CORNER_PRODUCT, SAMPLE_CORNERS, make_puzzle
from matching import (
    build_edge_index,
    classify_tiles,
    corner_product,
    find_corners,
    unmatched_edges,
)
from models import PuzzleError


def test_edge_index_owners(sample_tiles):
    index = build_edge_index(sample_tiles)
    sizes = Counter(len(owners) for owners in index.values())
    # 12 shared sides and 12 open sides, each in both reading directions
    assert sizes == {1: 24, 2: 24}


def test_find_corners(sample_tiles):
    assert find_corners(sample_tiles) == SAMPLE_CORNERS


def test_corner_product(sample_tiles):
    assert corner_product(sample_tiles) == SAMPLE_CORNER_PRODUCT


def test_unmatched_edges(sample_tiles):
    unmatched = unmatched_edges(sample_tiles)
    assert len(unmatched[1427]) == 0
    assert len(unmatched[2311]) == 2
    for tid in SAMPLE_CORNERS:
        assert len(unmatched[tid]) == 4


def test_classify_tiles(sample_tiles):
    labels = classify_tiles(sample_tiles)
    assert Counter(labels.values()) == {"corner": 4, "border": 4, "interior": 1}
    assert labels[1427] == "interior"


@pytest.mark.parametrize("n", [2, 3, 5])
def test_any_square_arrangement_has_four_corners(n):
    tiles, _, _ = make_puzzle(n, seed=n)
    step = n - 1
    expected = sorted(1000 + i * n + j for i in (0, step) for j in (0, step))
    assert find_corners(tiles) == expected


def test_single_tile_is_its_own_corner():
    tiles, _, _ = make_puzzle(1)
    assert find_corners(tiles) == [1000]
    assert classify_tiles(tiles) == {1000: "corner"}
    assert corner_product(tiles) == 1000


def test_corner_product_needs_four_corners(sample_tiles):
    # dropping the centre tile opens a side on four border tiles
    tiles = [t for t in sample_tiles if t.id != 1427]
    with pytest.raises(PuzzleError):
        corner_product(tiles)
