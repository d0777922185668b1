"""Centralized Color Palette - Single source of truth for all dashboard colors.

This module provides consistent color definitions for:
- Album types (Tableau 10 hues)
- Heatmap scale and selection emphasis
- Chart grid

Color Consistency Guarantee:
- "album" is ALWAYS #4e79a7 (Tableau blue) in the scatter, legend and
  parallel coordinates
- Unrecognized album types ALWAYS fall back to gray #9aa0a6
"""

from typing import Dict, Optional

# ============================================================================
# ALBUM TYPE COLORS - Tableau 10
# ============================================================================

ALBUM_TYPE_COLORS: Dict[str, str] = {
    "album": "#4e79a7",        # Tableau Blue
    "single": "#f28e2b",       # Tableau Orange
    "compilation": "#e15759",  # Tableau Red
    "unknown": "#9aa0a6",      # Gray
}

# ============================================================================
# HEATMAP COLORS
# ============================================================================

HEATMAP_COLORSCALE = "Blues"
SELECTION_COLOR = "#ff7f0e"  # Orange outline for the selected cell
DIM_OVERLAY_COLOR = "rgba(255, 255, 255, 0.75)"  # Fades unselected cells to ~0.25
GRID_COLOR = "#eeeeee"

# ============================================================================
# HELPER FUNCTIONS - Consistent color access
# ============================================================================


def album_type_color(album_type: Optional[str]) -> str:
    """Get consistent color for an album type.

    Args:
        album_type: Album type tag (case-insensitive). None means unknown.

    Returns:
        Hex color string

    Examples:
        >>> album_type_color("Single")
        '#f28e2b'
        >>> album_type_color("ep")
        '#9aa0a6'
    """
    key = (album_type or "unknown").lower()
    return ALBUM_TYPE_COLORS.get(key, ALBUM_TYPE_COLORS["unknown"])


__all__ = [
    "ALBUM_TYPE_COLORS",
    "HEATMAP_COLORSCALE",
    "SELECTION_COLOR",
    "DIM_OVERLAY_COLOR",
    "GRID_COLOR",
    "album_type_color",
]
