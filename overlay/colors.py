from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

from typography.utils import FONT_FAMILY, FONT_SIZE, SPACING

from .plan import Color

ISSUE_COLORS: Dict[str, Color] = {
    FONT_FAMILY: (1.0, 0.0, 0.0),   # red
    FONT_SIZE: (1.0, 0.5, 0.0),     # orange
    SPACING: (1.0, 1.0, 0.0),       # yellow
}

# Phase offsets of the R, G, B sine waves (a third of a turn apart)
_PHASES = np.array([0.0, 1.0 / 3.0, 2.0 / 3.0])


def hue_to_rgb(hue: float) -> Color:
    """Map a hue in [0, 1) to RGB with three phase-shifted sine waves (no lookup table)."""
    rgb = np.sin((hue + _PHASES) * np.pi * 2) * 0.5 + 0.5
    return (float(rgb[0]), float(rgb[1]), float(rgb[2]))


def family_color(index: int, count: int) -> Color:
    """Color of the ``index``-th of ``count`` families, evenly spread over the wheel."""
    if count <= 0:
        return hue_to_rgb(0.0)
    return hue_to_rgb(index / count)


def family_palette(families: Sequence[str]) -> Dict[str, Color]:
    """Family -> color, stable for a given discovery order."""
    n = len(families)
    return {name: family_color(i, n) for i, name in enumerate(families)}


def issue_legend_label(issue_type: str) -> str:
    return issue_type[:1].upper() + issue_type[1:] + " Issues"
