"""Text and image rendering of the galaxy map.

Rendering sits outside the engine: nothing here mutates game state.
"""

import matplotlib
# Use non-interactive backend for server environments
matplotlib.use('Agg')

import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import numpy as np
import os
from typing import List

from ..core.enums import CellType
from ..core.constants import MAX_COMPANIES, COMPANY_LETTERS
from ..game.board import GalaxyMap

# Colour per rendered category: empty, outpost, star, then one per company
CELL_COLORS = [
    "#0b0c1e",  # empty space
    "#7f8c8d",  # outpost
    "#f1c40f",  # star
    "#e74c3c", "#3498db", "#2ecc71", "#9b59b6",
    "#e67e22", "#1abc9c", "#ec407a", "#8d6e63",
]

_CATEGORY = {
    int(CellType.EMPTY): 0,
    int(CellType.OUTPOST): 1,
    int(CellType.STAR): 2,
}


def render_text(galaxy: GalaxyMap, with_axes: bool = False) -> List[str]:
    """Render the map as one string per row.

    Cells use ``.`` for empty space, ``+`` for outposts, ``*`` for stars
    and ``A``..``H`` for company territory. With ``with_axes`` the rows are
    prefixed by their y coordinate and a header of x coordinates (mod 10)
    is added.
    """
    rows = galaxy.to_rows()
    if not with_axes:
        return rows

    header = "   " + "".join(str(x % 10) for x in range(galaxy.width))
    return [header] + [f"{y:2d} {row}" for y, row in enumerate(rows)]


def galaxy_to_categories(galaxy: GalaxyMap) -> np.ndarray:
    """Map cell values onto colour indices, shaped (height, width) for imshow."""
    categories = np.zeros((galaxy.width, galaxy.height), dtype=np.int16)
    for value, category in _CATEGORY.items():
        categories[galaxy.cells == value] = category
    company_mask = galaxy.cells >= 0
    categories[company_mask] = galaxy.cells[company_mask].astype(np.int16) + 3
    return categories.T


def render_galaxy_png(game_state, save_path: str, dpi: int = 100) -> str:
    """Draw the galaxy as coloured squares with company letters and save it.

    Returns the path written.
    """
    galaxy = game_state.galaxy
    categories = galaxy_to_categories(galaxy)
    cmap = ListedColormap(CELL_COLORS[:3 + MAX_COMPANIES])

    fig, ax = plt.subplots(figsize=(galaxy.width * 0.3 + 1, galaxy.height * 0.3 + 1.5))
    try:
        ax.imshow(categories, cmap=cmap, vmin=0, vmax=2 + MAX_COMPANIES, interpolation="nearest")

        for x, y, value in galaxy.iter_cells():
            if value >= 0:
                ax.text(x, y, COMPANY_LETTERS[value], ha="center", va="center",
                        fontsize=7, color="white", fontweight="bold")
            elif value == CellType.STAR:
                ax.text(x, y, "*", ha="center", va="center", fontsize=8, color="black")

        ax.set_xticks(np.arange(-0.5, galaxy.width, 1), minor=True)
        ax.set_yticks(np.arange(-0.5, galaxy.height, 1), minor=True)
        ax.grid(which="minor", color="#2c3e50", linewidth=0.4)
        ax.tick_params(which="both", length=0, labelsize=6)

        on_map = [c.letter for c in game_state.companies if c.on_map]
        ax.set_title(f"Turn {game_state.turn_number} - companies: {', '.join(on_map) or 'none'}",
                     fontsize=9)

        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(save_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)  # Always close to free memory
    return save_path
