"""Configuration settings for the project."""

# Placement configuration
SOLVER_CONFIG = {
    "exhaustive": False,  # fall back to backtracking when a cell has 0 or 2+ fits
    "start": None,        # corner tile id placed at (0, 0); None = lowest corner id
}

# Rendering configuration (colors are RGB)
RENDER_CONFIG = {
    "cell_size": 8,
    "set_color": (20, 90, 160),
    "clear_color": (230, 240, 250),
    "pattern_color": (30, 160, 70),
    "outline": True,
    "outline_color": (200, 40, 40),
}

# Pattern configuration
PATTERN_CONFIG = {
    "pattern_file": None,  # text file with '#' cells; None = sea monster
}
