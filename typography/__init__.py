"""
typography — Font and spacing consistency analysis over extracted text runs.

The input is the ordered list of glyph runs a document parser reports
(font family, size, position, box).  Each detector looks for a different
trace of post-hoc editing and returns a list of immutable
:class:`~typography.utils.Inconsistency` records; the scoring engine in
:mod:`scoring` turns those into a verdict.

Modules
-------
utils        TextRun / Position / Inconsistency data model, geometry and
             JSON helpers.
context      Size-based context classifier (header / subheader / body)
             and the context grouping fold.
font_family  Too many distinct families inside one context.
font_size    Abnormal font-size variance inside one context.
spacing      Abnormal gap between consecutive runs (reading order).
detectors    ``DetectorConfig`` and ``detect_all()``.

Usage
-----
    from typography import TextRun, Position, detect_all

    runs = [TextRun("Total", "Arial", 12.0, Position(72, 700), 30, 12)]
    issues = detect_all(runs)
"""

from .context import CONTEXTS, classify, group_by_context
from .detectors import DetectorConfig, detect_all
from .font_family import detect_family_issues
from .font_size import detect_size_issues
from .spacing import detect_spacing_issues
from .utils import (
    FONT_FAMILY,
    FONT_SIZE,
    ISSUE_TYPES,
    SPACING,
    Inconsistency,
    IssuesByType,
    Position,
    TextRun,
    empty_issues,
    font_inventory,
)

__all__ = [
    "CONTEXTS", "classify", "group_by_context",
    "DetectorConfig", "detect_all",
    "detect_family_issues", "detect_size_issues", "detect_spacing_issues",
    "FONT_FAMILY", "FONT_SIZE", "SPACING", "ISSUE_TYPES",
    "Inconsistency", "IssuesByType", "Position", "TextRun",
    "empty_issues", "font_inventory",
]
