# main.py
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import PATTERN_CONFIG, RENDER_CONFIG, SOLVER_CONFIG
from matching import build_edge_index, corner_product
from models import PuzzleError, Tile
from parsing import load_tiles, parse_tiles
from reconstruct import assemble_image
from render import render_solution, save_render
from scanner import SEA_MONSTER, Pattern, find_matches, roughness_from_matches
from solver import puzzle_size, solve_puzzle

logger = logging.getLogger(__name__)


def load_pattern(path: Optional[str]) -> Pattern:
    if path is None:
        return SEA_MONSTER
    return Pattern.from_lines(Path(path).read_text().splitlines())


def solve_tiles(
    tiles: List[Tile],
    pattern: Pattern = SEA_MONSTER,
    exhaustive: bool = SOLVER_CONFIG["exhaustive"],
    start: Optional[int] = SOLVER_CONFIG["start"]
) -> Dict[str, Any]:
    """
    Run corner detection, placement, assembly and the pattern scan.

    Returns a dict with the two answers plus the intermediate board, image and
    matches so callers can render or inspect them.
    """
    side = puzzle_size(tiles)
    logger.info(f"{len(tiles)} tiles, {side}x{side} board")

    t0 = time.perf_counter()
    index = build_edge_index(tiles)
    product = corner_product(tiles, index)
    logger.info(f"Corner product computed in {time.perf_counter() - t0:.4f}s")

    t0 = time.perf_counter()
    board = solve_puzzle(tiles, start=start, exhaustive=exhaustive)
    logger.info(f"Board solved in {time.perf_counter() - t0:.4f}s")

    t0 = time.perf_counter()
    image = assemble_image(board, tiles)
    logger.info(f"Image assembled in {time.perf_counter() - t0:.4f}s")

    t0 = time.perf_counter()
    matches = find_matches(image, pattern)
    rough = roughness_from_matches(image, pattern, matches)
    logger.info(f"Pattern scan finished in {time.perf_counter() - t0:.4f}s")

    return {
        "tiles": tiles,
        "corner_product": product,
        "board": board,
        "image": image,
        "matches": matches,
        "roughness": rough,
    }


def run(text: str, pattern: Pattern = SEA_MONSTER, exhaustive: bool = SOLVER_CONFIG["exhaustive"]) -> Dict[str, Any]:
    """Parse puzzle text and solve it end to end."""
    t0 = time.perf_counter()
    tiles = parse_tiles(text)
    logger.info(f"Parsed in {time.perf_counter() - t0:.4f}s")
    return solve_tiles(tiles, pattern=pattern, exhaustive=exhaustive)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reassemble square image tiles and search the image for a pattern",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py tests/data/sample.txt
  python main.py input.txt --render solved.png --cell-size 6 --verbose
  cat input.txt | python main.py -
        """,
    )

    parser.add_argument("input", help="Puzzle text file, or '-' for stdin")
    parser.add_argument(
        "--exhaustive",
        action="store_true",
        default=SOLVER_CONFIG["exhaustive"],
        help="Backtrack instead of failing when a cell has zero or several fits",
    )
    parser.add_argument(
        "--start",
        type=int,
        default=SOLVER_CONFIG["start"],
        help="Id of the corner tile placed at the top-left (default: lowest corner id)",
    )
    parser.add_argument(
        "--pattern",
        default=PATTERN_CONFIG["pattern_file"],
        help="Text file with the pattern to search for, '#' marks set cells (default: sea monster)",
    )
    parser.add_argument("--render", help="Write the assembled image to this PNG path")
    parser.add_argument(
        "--cell-size",
        type=positive_int,
        default=RENDER_CONFIG["cell_size"],
        help=f"Pixels per image cell when rendering (default: {RENDER_CONFIG['cell_size']})",
    )
    parser.add_argument(
        "--verbose", "--trace",
        dest="verbose",
        action="store_true",
        help="Log progress and per-stage timings",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(message)s",
    )

    try:
        pattern = load_pattern(args.pattern)

        t0 = time.perf_counter()
        tiles = load_tiles(args.input)
        logger.info(f"Parsed in {time.perf_counter() - t0:.4f}s")

        result = solve_tiles(tiles, pattern=pattern, exhaustive=args.exhaustive, start=args.start)
    except (PuzzleError, FileNotFoundError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1

    print(f"part 1 solution: {result['corner_product']}")
    print(f"part 2 solution: {result['roughness']}")

    if args.render:
        image = render_solution(result["image"], pattern, result["matches"], args.cell_size)
        save_render(image, args.render)
        print(f"Saved rendered image to {args.render}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
