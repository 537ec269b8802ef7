# parsing.py
import logging
import re
import sys
from pathlib import Path
from typing import List, Tuple

import numpy as np

from features import build_tile
from models import MalformedTile, Tile

logger = logging.getLogger(__name__)

HEADER_RE = re.compile(r"^Tile ?(\d+):$")
ROW_RE = re.compile(r"^[#.]+$")


def split_blocks(text: str) -> List[List[str]]:
    """Split the input into tile blocks on blank lines."""
    blocks: List[List[str]] = []
    current: List[str] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            if current:
                blocks.append(current)
                current = []
            continue
        current.append(line)
    if current:
        blocks.append(current)
    return blocks


def parse_block(lines: List[str]) -> Tuple[int, np.ndarray]:
    """
    Parse one block: a `Tile <digits>:` header followed by rows over {'#', '.'}.
    Returns (tile_id, bool grid).
    """
    match = HEADER_RE.match(lines[0])
    if match is None:
        raise MalformedTile(f"bad tile header {lines[0]!r}")
    tile_id = int(match.group(1))

    rows = lines[1:]
    if not rows:
        raise MalformedTile("no pixel rows", tile_id)

    for row in rows:
        if ROW_RE.match(row) is None:
            raise MalformedTile(f"bad pixel row {row!r}", tile_id)

    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise MalformedTile("rows have different lengths", tile_id)
    if width != len(rows):
        raise MalformedTile(f"grid must be square, got {len(rows)}x{width}", tile_id)

    grid = np.array([[ch == "#" for ch in row] for row in rows], dtype=bool)
    return tile_id, grid


def parse_tiles(text: str) -> List[Tile]:
    """
    Parse every tile in the input. Tiles must have distinct ids and a common side.
    The returned list is the arena the solver indexes into.
    """
    tiles: List[Tile] = []
    seen = set()

    for block in split_blocks(text):
        tile_id, grid = parse_block(block)
        if tile_id in seen:
            raise MalformedTile("duplicate tile id", tile_id)
        if tiles and grid.shape[0] != tiles[0].side:
            raise MalformedTile(
                f"side {grid.shape[0]} differs from first tile side {tiles[0].side}", tile_id
            )
        seen.add(tile_id)
        tiles.append(build_tile(tile_id, grid))

    logger.info(f"Parsed {len(tiles)} tiles")
    return tiles


def load_tiles(path: str) -> List[Tile]:
    """Load tiles from a file, or from stdin when path is '-'."""
    if path == "-":
        return parse_tiles(sys.stdin.read())

    input_path = Path(path)
    if not input_path.is_file():
        raise FileNotFoundError(f"Could not load puzzle: {path}")
    return parse_tiles(input_path.read_text())
