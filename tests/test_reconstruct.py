import numpy as np
import pytest

from conftest import is_orientation_of, make_puzzle
from models import Board, PuzzleError
from reconstruct import assemble_image, oriented_interior, trim_border
from solver import solve_puzzle


def test_trim_border():
    grid = np.arange(16).reshape(4, 4)
    assert trim_border(grid).tolist() == [[5, 6], [9, 10]]


def test_oriented_interior_matches_orientation(sample_tiles):
    tile = sample_tiles[0]
    assert np.array_equal(oriented_interior(tile, 0), tile.grid[1:-1, 1:-1])
    assert np.array_equal(oriented_interior(tile, 1), np.rot90(tile.grid[1:-1, 1:-1]))


def test_sample_image_side(sample_tiles):
    image = assemble_image(solve_puzzle(sample_tiles), sample_tiles)
    assert image.shape == (3 * (10 - 2), 3 * (10 - 2))
    assert image.dtype == bool
    assert int(image.sum()) == 303


def test_image_is_read_only(sample_tiles):
    image = assemble_image(solve_puzzle(sample_tiles), sample_tiles)
    with pytest.raises(ValueError):
        image[0, 0] = True


@pytest.mark.parametrize("n", [1, 2, 3])
def test_image_reproduces_source(n):
    tiles, truth, _ = make_puzzle(n, side=12 if n == 1 else 24, seed=20 + n)
    image = assemble_image(solve_puzzle(tiles), tiles)
    assert image.shape == (n * (tiles[0].side - 2),) * 2
    assert is_orientation_of(image, truth)


def test_single_tile_image_is_trimmed_interior():
    tiles, _, _ = make_puzzle(1, side=8)
    image = assemble_image(solve_puzzle(tiles), tiles)
    assert np.array_equal(image, trim_border(tiles[0].grid))


def test_incomplete_board(sample_tiles):
    with pytest.raises(PuzzleError):
        assemble_image(Board(3, 3), sample_tiles)
