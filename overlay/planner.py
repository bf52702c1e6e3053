"""
overlay.planner — Turn detector output into annotation plans.

Two independent plans are produced for the document writer:

* :func:`plan_suspicious_overlay` — one rectangle per run (or position)
  implicated by an issue, colored by issue type, plus a fixed three-entry
  legend.
* :func:`plan_font_type_overlay` — one rectangle per run, colored by its
  font family, plus a legend listing every family and its run count.

Both are pure functions of their inputs.  Contexts are re-derived per run,
so the result never depends on the order the detectors ran in.  Rectangles
stay in the parser's coordinate space; flipping to the output format's
origin is the writer's job.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from typography.context import classify
from typography.utils import (
    FONT_FAMILY,
    FONT_SIZE,
    SPACING,
    Inconsistency,
    Position,
    TextRun,
    font_inventory,
    unique_families,
)

from .colors import ISSUE_COLORS, family_palette, issue_legend_label
from .plan import Annotation, AnnotationPlan, Color, Legend, LegendEntry, Rect, page_index_for

DEFAULT_OPACITY = 0.3
DEFAULT_BOX_SIZE = 10.0

SUSPICIOUS_LEGEND_TITLE = "Suspicious Areas Legend:"
FONT_LEGEND_TITLE = "Font Types Legend:"
FONT_LEGEND_TITLE_GAP = 40.0


def _place(
    position: Position,
    width: float,
    height: float,
    color: Color,
    *,
    page_height: float,
    page_count: Optional[int],
    opacity: float,
    default_size: float,
) -> Optional[Annotation]:
    page_index = page_index_for(position.y, page_height)
    if page_index < 0:
        return None
    if page_count is not None and page_index >= page_count:
        return None
    return Annotation(
        page_index=page_index,
        rect=Rect(position.x, position.y, width or default_size, height or default_size),
        color=color,
        opacity=opacity,
    )


def _runs_for_issue(runs: Sequence[TextRun], issue: Inconsistency) -> List[TextRun]:
    if issue.type == FONT_FAMILY:
        fonts = set(issue.detected_fonts or ())
        return [r for r in runs if r.font_family in fonts and classify(r) == issue.context]
    return [r for r in runs if classify(r) == issue.context]


def plan_suspicious_overlay(
    runs: Sequence[TextRun],
    issues_by_type: Mapping[str, Sequence[Inconsistency]],
    *,
    page_height: float,
    page_count: Optional[int] = None,
    opacity: float = DEFAULT_OPACITY,
    default_size: float = DEFAULT_BOX_SIZE,
) -> AnnotationPlan:
    """Highlight every run or position implicated by an issue.

    Parameters
    ----------
    runs : sequence of TextRun
        The run list the detectors saw.
    issues_by_type : mapping
        ``{"fontFamily": [...], "fontSize": [...], "spacing": [...]}``.
    page_height : float
        Height shared by all pages; used to derive each rectangle's page.
    page_count : int, optional
        When given, rectangles falling past the last page are dropped.

    Returns
    -------
    AnnotationPlan
        Family rectangles first, then size, then spacing, each in issue
        order and run order.
    """
    placement = dict(
        page_height=page_height,
        page_count=page_count,
        opacity=opacity,
        default_size=default_size,
    )
    annotations: List[Annotation] = []

    for issue_type in (FONT_FAMILY, FONT_SIZE):
        color = ISSUE_COLORS[issue_type]
        for issue in issues_by_type.get(issue_type, []):
            for run in _runs_for_issue(runs, issue):
                ann = _place(run.position, run.width, run.height, color, **placement)
                if ann is not None:
                    annotations.append(ann)

    # spacing issues carry only the offending run's origin
    for issue in issues_by_type.get(SPACING, []):
        if issue.position is None:
            continue
        ann = _place(issue.position, 0.0, 0.0, ISSUE_COLORS[SPACING], **placement)
        if ann is not None:
            annotations.append(ann)

    legend = Legend(
        title=SUSPICIOUS_LEGEND_TITLE,
        entries=tuple(
            LegendEntry(issue_legend_label(t), color) for t, color in ISSUE_COLORS.items()
        ),
        opacity=opacity,
    )
    return AnnotationPlan(annotations=tuple(annotations), legend=legend, page_height=page_height)


def plan_font_type_overlay(
    runs: Sequence[TextRun],
    *,
    page_height: float,
    page_count: Optional[int] = None,
    opacity: float = DEFAULT_OPACITY,
    default_size: float = DEFAULT_BOX_SIZE,
) -> AnnotationPlan:
    """Color every run by its font family (families in discovery order)."""
    palette = family_palette(unique_families(runs))

    annotations: List[Annotation] = []
    for run in runs:
        ann = _place(
            run.position, run.width, run.height, palette[run.font_family],
            page_height=page_height,
            page_count=page_count,
            opacity=opacity,
            default_size=default_size,
        )
        if ann is not None:
            annotations.append(ann)

    entries = tuple(
        LegendEntry(f"{f['name']} ({f['occurrences']} occurrences)", palette[f["name"]])
        for f in font_inventory(runs)
    )
    legend = Legend(
        title=FONT_LEGEND_TITLE,
        entries=entries,
        title_gap=FONT_LEGEND_TITLE_GAP,
        opacity=opacity,
    )
    return AnnotationPlan(annotations=tuple(annotations), legend=legend, page_height=page_height)
