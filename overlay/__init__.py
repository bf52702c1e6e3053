from .colors import ISSUE_COLORS, family_color, family_palette, hue_to_rgb
from .plan import (
    Annotation,
    AnnotationPlan,
    Legend,
    LegendEntry,
    LegendRow,
    Rect,
    page_index_for,
)
from .planner import plan_font_type_overlay, plan_suspicious_overlay

__all__ = [
    "ISSUE_COLORS", "family_color", "family_palette", "hue_to_rgb",
    "Annotation", "AnnotationPlan", "Legend", "LegendEntry", "LegendRow", "Rect",
    "page_index_for",
    "plan_font_type_overlay", "plan_suspicious_overlay",
]
