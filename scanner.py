# scanner.py
import logging
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from orientation import ORIENTATIONS, orient_grid

logger = logging.getLogger(__name__)


class Pattern:
    """
    A fixed shape: (row, col) offsets of its set cells relative to the
    top-left corner of a height x width bounding box.
    """
    def __init__(self, offsets: Sequence[Tuple[int, int]], height: int, width: int):
        self.offsets: Tuple[Tuple[int, int], ...] = tuple(sorted(set(offsets)))
        self.height = height
        self.width = width

        if not self.offsets:
            raise ValueError("pattern has no set cells")
        for r, c in self.offsets:
            if not (0 <= r < height and 0 <= c < width):
                raise ValueError(f"offset {(r, c)} outside {height}x{width} box")

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Pattern":
        """'#' marks a cell that must be set; anything else is ignored."""
        offsets = [
            (r, c)
            for r, line in enumerate(lines)
            for c, ch in enumerate(line)
            if ch == "#"
        ]
        width = max((len(line) for line in lines), default=0)
        return cls(offsets, len(lines), width)

    @property
    def weight(self) -> int:
        return len(self.offsets)

    def __repr__(self) -> str:
        return f"Pattern({self.height}x{self.width}, weight={self.weight})"


SEA_MONSTER_LINES = (
    "                  # ",
    "#    ##    ##    ###",
    " #  #  #  #  #  #   ",
)

SEA_MONSTER = Pattern.from_lines(SEA_MONSTER_LINES)


class Match(NamedTuple):
    orientation: int
    row: int
    col: int


def all_orientations(bitmap: np.ndarray) -> List[np.ndarray]:
    return [orient_grid(bitmap, k) for k in range(ORIENTATIONS)]


def match_anchors(bitmap: np.ndarray, pattern: Pattern) -> np.ndarray:
    """
    Boolean map over top-left anchors: True where every pattern offset
    lands on a set pixel. Shape (H - h + 1, W - w + 1), empty if the
    pattern does not fit.
    """
    height, width = bitmap.shape
    span_r = height - pattern.height + 1
    span_c = width - pattern.width + 1
    if span_r <= 0 or span_c <= 0:
        return np.zeros((0, 0), dtype=bool)

    hits = np.ones((span_r, span_c), dtype=bool)
    for dr, dc in pattern.offsets:
        hits &= bitmap[dr:dr + span_r, dc:dc + span_c]
    return hits


def find_matches(bitmap: np.ndarray, pattern: Pattern) -> List[Match]:
    matches: List[Match] = []
    for k, view in enumerate(all_orientations(bitmap)):
        for r, c in zip(*np.nonzero(match_anchors(view, pattern))):
            matches.append(Match(k, int(r), int(c)))

    logger.info(f"Found {len(matches)} matches of {pattern}")
    return matches


def count_matches(bitmap: np.ndarray, pattern: Pattern) -> int:
    return len(find_matches(bitmap, pattern))


def roughness_from_matches(bitmap: np.ndarray, pattern: Pattern, matches: Sequence[Match]) -> int:
    """
    Set pixels minus the pixels claimed by pattern matches. Overlapping
    matches are each counted in full, so the result can go negative for
    patterns that overlap themselves.
    """
    return int(np.count_nonzero(bitmap)) - len(matches) * pattern.weight


def roughness(bitmap: np.ndarray, pattern: Pattern = SEA_MONSTER) -> int:
    return roughness_from_matches(bitmap, pattern, find_matches(bitmap, pattern))
