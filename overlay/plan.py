from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

Color = Tuple[float, float, float]  # RGB, each channel in [0, 1]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True)
class Annotation:
    """One highlight rectangle.  ``rect`` is in the parser's coordinate space."""

    page_index: int
    rect: Rect
    color: Color
    opacity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pageIndex": self.page_index,
            "rect": self.rect.to_dict(),
            "color": list(self.color),
            "opacity": self.opacity,
        }


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: Color


@dataclass(frozen=True)
class LegendRow:
    entry: LegendEntry
    swatch: Rect                    # bottom-left origin, page 0
    label_point: Tuple[float, float]


@dataclass(frozen=True)
class Legend:
    """
    Legend block drawn on page 0.

    Geometry is measured from the bottom-left corner of the page: swatch
    ``i`` sits at ``origin_y + i * row_height`` and the title at
    ``origin_y + len(entries) * row_height + title_gap``, so a longer legend
    pushes its title up instead of overlapping the swatches.
    """

    title: str
    entries: Tuple[LegendEntry, ...]
    title_gap: float = 0.0
    origin: Tuple[float, float] = (50.0, 50.0)
    row_height: float = 20.0
    swatch_size: float = 15.0
    opacity: float = 0.3
    title_size: float = 12.0
    label_size: float = 10.0

    def title_point(self) -> Tuple[float, float]:
        x, y = self.origin
        return x, y + len(self.entries) * self.row_height + self.title_gap

    def layout(self) -> List[LegendRow]:
        x, y = self.origin
        rows: List[LegendRow] = []
        for i, entry in enumerate(self.entries):
            row_y = y + i * self.row_height
            rows.append(LegendRow(
                entry=entry,
                swatch=Rect(x, row_y, self.swatch_size, self.swatch_size),
                label_point=(x + 25.0, row_y + 4.0),
            ))
        return rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "entries": [{"label": e.label, "color": list(e.color)} for e in self.entries],
        }


@dataclass(frozen=True)
class AnnotationPlan:
    """Ordered highlight rectangles plus a legend, for the document writer."""

    annotations: Tuple[Annotation, ...]
    legend: Legend
    page_height: float

    def pages(self) -> List[int]:
        return sorted({a.page_index for a in self.annotations})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "annotations": [a.to_dict() for a in self.annotations],
            "legend": self.legend.to_dict(),
            "pageHeight": self.page_height,
        }


def page_index_for(y: float, page_height: float) -> int:
    """
    Page holding a document-wide ``y``: ``floor(y / page_height)``.

    Assumes every page is ``page_height`` tall and unrotated; mixed page
    sizes will misplace rectangles.  Non-finite input maps to -1 (no page).
    """
    if page_height <= 0 or not math.isfinite(y):
        return -1
    return int(math.floor(y / page_height))
