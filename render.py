# render.py
from collections import Counter
from typing import Optional, Sequence, Tuple
import numpy as np
import cv2
from PIL import Image

from config import RENDER_CONFIG
from orientation import orient_grid
from scanner import Match, Pattern


def pattern_mask(shape: Tuple[int, int], pattern: Pattern, matches: Sequence[Match]) -> np.ndarray:
    """Cells covered by the given matches, all taken in one orientation."""
    mask = np.zeros(shape, dtype=bool)
    for _, r, c in matches:
        for dr, dc in pattern.offsets:
            mask[r + dr, c + dc] = True
    return mask


def best_orientation(matches: Sequence[Match]) -> int:
    """The orientation holding the most matches, 0 when there are none."""
    if not matches:
        return 0
    return Counter(m.orientation for m in matches).most_common(1)[0][0]


def render_bitmap(
    bitmap: np.ndarray,
    mask: Optional[np.ndarray] = None,
    cell_size: Optional[int] = None
) -> np.ndarray:
    """
    Convert a bool bitmap to an RGB image, one cell_size x cell_size block
    per pixel. Cells in mask get the pattern color.
    """
    if cell_size is None:
        cell_size = RENDER_CONFIG["cell_size"]

    h, w = bitmap.shape
    rgb = np.zeros((h, w, 3), dtype=np.uint8)
    rgb[:, :] = RENDER_CONFIG["clear_color"]
    rgb[bitmap] = RENDER_CONFIG["set_color"]
    if mask is not None:
        rgb[mask] = RENDER_CONFIG["pattern_color"]

    if h == 0 or w == 0 or cell_size == 1:
        return rgb
    return cv2.resize(rgb, (w * cell_size, h * cell_size), interpolation=cv2.INTER_NEAREST)


def outline_matches(
    image: np.ndarray,
    matches: Sequence[Match],
    pattern: Pattern,
    cell_size: int,
    color: Optional[Tuple[int, int, int]] = None
) -> np.ndarray:
    """Draw the bounding box of each match on an upscaled image, in place."""
    if color is None:
        color = RENDER_CONFIG["outline_color"]

    for _, r, c in matches:
        x1, y1 = c * cell_size, r * cell_size
        x2 = (c + pattern.width) * cell_size - 1
        y2 = (r + pattern.height) * cell_size - 1
        cv2.rectangle(image, (x1, y1), (x2, y2), color, 1)
    return image


def render_solution(
    bitmap: np.ndarray,
    pattern: Pattern,
    matches: Sequence[Match],
    cell_size: Optional[int] = None
) -> np.ndarray:
    """Render the bitmap in the orientation where the pattern was found."""
    if cell_size is None:
        cell_size = RENDER_CONFIG["cell_size"]

    orientation = best_orientation(matches)
    view = np.ascontiguousarray(orient_grid(bitmap, orientation))
    shown = [m for m in matches if m.orientation == orientation]

    image = render_bitmap(view, pattern_mask(view.shape, pattern, shown), cell_size)
    if RENDER_CONFIG["outline"] and image.size:
        outline_matches(image, shown, pattern, cell_size)
    return image


def save_render(image: np.ndarray, out_path: str) -> None:
    Image.fromarray(image).save(out_path)
